"""Endpoint de importação de planilhas de anúncios.

POST /announcements/import recebe o .xlsx cru no corpo e devolve os
totais criados. Corpo vazio ou que não é planilha devolve zero; falha de
gravação → 500 com os totais parciais (o que já foi gravado permanece).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from api.routes.dependencies import get_dependencies
from app.bootstrap.dependencies import AppDependencies
from app.observability import reset_correlation_id, set_correlation_id
from utils.errors import AnnouncementPersistError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/import")
async def import_announcements(
    request: Request,
    dependencies: AppDependencies = Depends(get_dependencies),
) -> JSONResponse:
    """Importa anúncios a partir de uma planilha .xlsx."""
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        body = await request.body()
        logger.info("announcement_import_received", extra={"size_bytes": len(body)})

        try:
            result = await dependencies.sheet_ingestor.ingest(body)
        except AnnouncementPersistError as exc:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "persist_failed",
                    "announcements_created": exc.announcements_created,
                    "instants_created": exc.instants_created,
                },
            )

        return JSONResponse(status_code=status.HTTP_200_OK, content=result.model_dump())
    finally:
        reset_correlation_id(token)
