"""Formatters de logging estruturado.

Logs JSON carregam sempre os campos de REQUIRED_LOG_FIELDS; o formatter
texto existe só para execução local (LOG_FORMAT=text).
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Mapeamento de nomes de campos para formato padrão
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(service)s] [%(correlation_id)s] %(name)s: %(message)s"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-18 09:00:00,123",
            "level": "INFO",
            "logger": "app.services.notification_scheduler",
            "message": "notification_tick_completed",
            "correlation_id": "tick-3f2a...",
            "service": "atende_rh",
            "delivered": 2
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )


def create_text_formatter() -> logging.Formatter:
    """Formatter legível para desenvolvimento local (sem campos extra)."""
    return logging.Formatter(TEXT_FORMAT)
