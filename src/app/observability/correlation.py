"""Gerenciamento de correlation_id para rastreamento.

O correlation_id identifica uma request HTTP ou um tick do scheduler
e é injetado em todos os logs pelo CorrelationIdFilter.
Usa ContextVar para ser async-safe.

Uso:
    with correlation_scope(prefix="tick"):
        ...  # todos os logs carregam o mesmo correlation_id
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id(prefix: str = "") -> str:
    """Gera um novo correlation_id (UUID v4, com prefixo opcional)."""
    value = str(uuid.uuid4())
    return f"{prefix}-{value}" if prefix else value


@contextmanager
def correlation_scope(
    correlation_id: str | None = None,
    *,
    prefix: str = "",
) -> Iterator[str]:
    """Define um correlation_id durante o bloco e restaura ao sair."""
    value = correlation_id or generate_correlation_id(prefix)
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)
