"""Modelos de domínio de anúncios agendados.

Um Announcement é criado pela importação de planilha e removido pelo
scheduler quando não restam instantes pendentes. ScheduledInstant só
muda no campo `delivered`, sempre de False para True.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - usado em runtime pelo schema do Pydantic

from pydantic import BaseModel, ConfigDict, Field


class Announcement(BaseModel):
    """Mensagem nomeada a ser enviada em um ou mais instantes."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Identificador do anúncio.")
    name: str = Field(..., description="Nome/título do anúncio.")
    message: str = Field(..., description="Texto enviado aos assinantes.")


class ScheduledInstant(BaseModel):
    """Instante concreto (UTC) em que o anúncio deve ser entregue."""

    id: str = Field(..., description="Identificador do instante.")
    announcement_id: str = Field(..., description="Anúncio dono do instante.")
    at: datetime = Field(..., description="Data/hora de entrega (timezone-aware, UTC).")
    delivered: bool = Field(default=False, description="True após entrega confirmada.")


class DueInstant(BaseModel):
    """Projeção de um instante vencido junto com os dados do anúncio."""

    model_config = ConfigDict(frozen=True)

    instant_id: str
    at: datetime
    announcement_id: str
    name: str
    message: str


class IngestionResult(BaseModel):
    """Totais de uma importação de planilha."""

    announcements_created: int = Field(default=0, ge=0)
    instants_created: int = Field(default=0, ge=0)


__all__ = ["Announcement", "DueInstant", "IngestionResult", "ScheduledInstant"]
