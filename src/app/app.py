"""Entrypoint da aplicação Atende RH.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080

Cloud Run:
    O container deve expor a porta 8080 (padrão do Cloud Run).
    Use uma única instância: o scheduler não coordena entre processos.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.bootstrap.dependencies import build_dependencies
from config.logging import get_logger
from config.settings import get_notification_settings, get_storage_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


async def _seed_firestore_health_doc(firestore_client: object) -> None:
    """Escreve documento mínimo de health para check de readiness."""

    def _write_doc() -> None:
        firestore_client.collection("_health").document("check").set(  # type: ignore[attr-defined]
            {
                "updated_at": datetime.now(UTC).isoformat(),
                "service": "atende-rh",
            }
        )

    await asyncio.to_thread(_write_doc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Monta stores, sink, ingestor e scheduler
    - Inicia o loop do scheduler (NOTIFY_SCHEDULER_ENABLED)

    Shutdown:
    - Para o scheduler aguardando ticks em andamento
    - Fecha conexão Redis
    """
    logger.info("app_starting", extra={"service": "atende-rh"})
    validate_runtime_settings()
    storage = get_storage_settings()
    notifications = get_notification_settings()

    app.state.redis_client = None
    app.state.firestore_client = None
    if storage.subscriber_backend == "redis":
        app.state.redis_client = create_async_redis_client()
    if storage.announcement_backend == "firestore":
        app.state.firestore_client = create_firestore_client()
        try:
            await _seed_firestore_health_doc(app.state.firestore_client)
        except Exception as exc:
            logger.warning("firestore_health_seed_failed", extra={"error_type": type(exc).__name__})

    dependencies = build_dependencies()
    app.state.dependencies = dependencies
    app.state.scheduler_enabled = notifications.scheduler_enabled
    if notifications.scheduler_enabled:
        dependencies.scheduler.start()

    yield

    logger.info("app_shutting_down", extra={"service": "atende-rh"})
    await dependencies.scheduler.stop(timeout_seconds=30.0)
    redis_client = getattr(app.state, "redis_client", None)
    if redis_client is not None:
        await redis_client.aclose()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="Atende RH",
        description="Importação e envio agendado de anúncios de RH via Telegram",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": "atende-rh"})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting Atende RH in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
