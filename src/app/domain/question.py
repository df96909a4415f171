"""Modelos de perguntas frequentes (respostas prontas do RH)."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - usado em runtime pelo schema do Pydantic

from pydantic import BaseModel, ConfigDict, Field


class QuestionDraft(BaseModel):
    """Dados enviados para cadastrar uma pergunta."""

    model_config = ConfigDict(str_strip_whitespace=True)

    question: str = Field(..., min_length=1, description="Pergunta como o colaborador a faz.")
    answer: str = Field(..., min_length=1, description="Resposta pronta do RH.")
    document: str | None = Field(
        default=None,
        description="Texto ou referência de apoio (política, link, anexo).",
    )


class Question(QuestionDraft):
    """Pergunta cadastrada."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Identificador da pergunta.")
    created_at: datetime = Field(..., description="Momento do cadastro (UTC).")


__all__ = ["Question", "QuestionDraft"]
