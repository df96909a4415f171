"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (health, importação, webhook)
- Validação inicial de request (headers, corpo)
- Delegação para serviços montados no bootstrap
- Respostas HTTP apropriadas

Estrutura:
- routes/health/: health checks e readiness
- routes/announcements/: importação de planilhas
- routes/telegram/: webhook de updates do bot

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
