"""Registro de métricas via structured logging.

As métricas são logs estruturados (metric_type no extra) e podem ser
agregadas depois por BigQuery, Cloud Logging, etc.

Uso:
    start = time.perf_counter()
    # ... operação ...
    record_latency("notification_scheduler", "tick", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "sheet_ingestor")
        operation: Nome da operação (ex: "ingest", "tick")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (default: o do contexto)
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_delivery(
    delivered: int,
    failed: int,
    cleaned: int = 0,
) -> None:
    """Registra contadores de um tick do scheduler.

    Args:
        delivered: Instantes entregues e marcados no tick
        failed: Instantes cuja entrega falhou (continuam pendentes)
        cleaned: Anúncios esgotados removidos
    """
    logger.info(
        "metric_delivery",
        extra={
            "metric_type": "delivery",
            "component": "notification_scheduler",
            "delivered": delivered,
            "failed": failed,
            "cleaned": cleaned,
        },
    )


def record_ingestion(announcements_created: int, instants_created: int) -> None:
    """Registra contadores de uma importação de planilha."""
    logger.info(
        "metric_ingestion",
        extra={
            "metric_type": "ingestion",
            "component": "sheet_ingestor",
            "announcements_created": announcements_created,
            "instants_created": instants_created,
        },
    )
