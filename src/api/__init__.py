"""API — camada de borda HTTP.

Responsabilidades:
- Receber uploads de planilhas e updates do Telegram
- Validar headers e payloads
- Extrair dados de payloads externos
- Mapear erros de domínio para respostas HTTP

Subpastas:
- normalizers/: extração de dados de payloads externos
- routes/: endpoints HTTP (health, anúncios, webhook Telegram)

NÃO PODE conter: regras de parsing de planilha nem lógica de entrega.
"""
