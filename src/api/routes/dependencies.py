"""Acesso às dependências montadas no lifespan."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, status

if TYPE_CHECKING:
    from app.bootstrap.dependencies import AppDependencies


def get_dependencies(request: Request) -> AppDependencies:
    """Retorna AppDependencies do app.state (503 se o startup falhou)."""
    dependencies = getattr(request.app.state, "dependencies", None)
    if dependencies is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="dependencies_not_ready",
        )
    return dependencies
