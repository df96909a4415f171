"""Endpoints de perguntas frequentes (respostas prontas do RH).

POST   /questions               cadastra pergunta (201)
GET    /questions               lista em ordem de cadastro
GET    /questions/{question_id} pergunta pelo id (404 se não existe)
DELETE /questions/{question_id} remove (204; 404 se não existe)

Falha de infraestrutura do store responde 503.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from api.routes.dependencies import get_dependencies
from app.bootstrap.dependencies import AppDependencies
from app.domain.question import QuestionDraft
from app.observability import reset_correlation_id, set_correlation_id
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

router = APIRouter()

STORE_UNAVAILABLE = {"error": "question_store_unavailable"}
NOT_FOUND = {"error": "question_not_found"}


async def _run(request: Request, operation: Callable[[], Awaitable[Response]]) -> Response:
    """Executa a operação com correlation_id e mapeia falha do store para 503."""
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        return await operation()
    except InfrastructureError as exc:
        logger.error("question_store_failed", extra={"error_type": type(exc).__name__})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=STORE_UNAVAILABLE,
        )
    finally:
        reset_correlation_id(token)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_question(
    request: Request,
    draft: QuestionDraft,
    dependencies: AppDependencies = Depends(get_dependencies),
) -> Response:
    """Cadastra uma pergunta com sua resposta."""

    async def _create() -> Response:
        question = await dependencies.question_store.create(draft)
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content=question.model_dump(mode="json"),
        )

    return await _run(request, _create)


@router.get("")
async def list_questions(
    request: Request,
    dependencies: AppDependencies = Depends(get_dependencies),
) -> Response:
    """Lista todas as perguntas cadastradas."""

    async def _list() -> Response:
        questions = await dependencies.question_store.list_all()
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=[q.model_dump(mode="json") for q in questions],
        )

    return await _run(request, _list)


@router.get("/{question_id}")
async def get_question(
    question_id: str,
    request: Request,
    dependencies: AppDependencies = Depends(get_dependencies),
) -> Response:
    """Devolve uma pergunta pelo id."""

    async def _get() -> Response:
        question = await dependencies.question_store.get(question_id)
        if question is None:
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=NOT_FOUND)
        return JSONResponse(status_code=status.HTTP_200_OK, content=question.model_dump(mode="json"))

    return await _run(request, _get)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: str,
    request: Request,
    dependencies: AppDependencies = Depends(get_dependencies),
) -> Response:
    """Remove uma pergunta."""

    async def _delete() -> Response:
        if not await dependencies.question_store.delete(question_id):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=NOT_FOUND)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return await _run(request, _delete)
