"""Protocolo de persistência de perguntas frequentes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.question import Question, QuestionDraft


class QuestionStoreProtocol(ABC):
    """Contrato assíncrono do cadastro de perguntas e respostas."""

    @abstractmethod
    async def create(self, draft: QuestionDraft) -> Question:
        """Cadastra a pergunta e devolve o registro com id e created_at."""

    @abstractmethod
    async def list_all(self) -> list[Question]:
        """Todas as perguntas, da mais antiga para a mais nova."""

    @abstractmethod
    async def get(self, question_id: str) -> Question | None:
        """Pergunta pelo id, ou None."""

    @abstractmethod
    async def delete(self, question_id: str) -> bool:
        """Remove a pergunta.

        Returns:
            True se existia e foi removida.
        """
