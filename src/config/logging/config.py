"""Logging do Atende RH.

Um único StreamHandler no root logger. Cada linha carrega `service` e o
`correlation_id` ativo: o id do request HTTP (header x-correlation-id) ou
`tick-<uuid>` durante um tick do scheduler de notificações. Em produção a
saída é JSON (Cloud Logging); LOG_FORMAT=text é para rodar localmente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter, create_text_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "atende_rh"

LogFormat = Literal["json", "text"]

FORMATTER_FACTORIES: dict[str, Callable[[], logging.Formatter]] = {
    "json": create_json_formatter,
    "text": create_text_formatter,
}


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    log_format: LogFormat = "json",
) -> None:
    """Instala o handler do serviço no root logger, descartando os anteriores.

    Chamada por app.bootstrap.initialize_app; o getter normalmente é
    app.observability.get_correlation_id.

    Raises:
        ValueError: nível ou formato desconhecido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )
    factory = FORMATTER_FACTORIES.get(log_format)
    if factory is None:
        raise ValueError(f"Formato de log inválido: {log_format}")

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(factory())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
