"""App — coração do sistema: serviços, infraestrutura e wiring.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos de anúncio, instante e células de planilha
- services/: normalização, importação e scheduler de entrega
- infra/: implementações concretas de IO (stores, Telegram, planilha)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas em log

Padrão: app executa; api adapta; config configura; utils apoia.
"""
