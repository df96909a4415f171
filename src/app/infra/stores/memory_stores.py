"""Stores em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING
from uuid import uuid4

from app.domain.announcement import Announcement, DueInstant, ScheduledInstant
from app.domain.question import Question
from app.protocols.announcement_store import AnnouncementStoreProtocol
from app.protocols.question_store import QuestionStoreProtocol
from app.protocols.subscriber_store import SubscriberStoreProtocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.question import QuestionDraft


def _as_utc(moment: datetime) -> datetime:
    """Normaliza para UTC; datetime ingênuo é tratado como UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class MemoryAnnouncementStore(AnnouncementStoreProtocol):
    """Store de anúncios em memória — apenas para dev/test.

    A criação monta anúncio e instantes fora do estado e só então
    publica tudo de uma vez, então uma falha no meio não deixa resto.
    """

    def __init__(self) -> None:
        self._announcements: dict[str, Announcement] = {}
        self._instants: dict[str, ScheduledInstant] = {}

    async def create_announcement_with_instants(
        self,
        name: str,
        message: str,
        instants: Sequence[datetime],
    ) -> str:
        announcement = Announcement(id=uuid4().hex, name=name, message=message)
        staged: dict[str, ScheduledInstant] = {}
        for at in instants:
            instant = ScheduledInstant(
                id=uuid4().hex,
                announcement_id=announcement.id,
                at=_as_utc(at),
            )
            staged[instant.id] = instant

        self._announcements[announcement.id] = announcement
        self._instants.update(staged)
        return announcement.id

    async def find_due(
        self,
        now: datetime,
        grace_ms: int,
        limit: int,
    ) -> list[DueInstant]:
        threshold = _as_utc(now) + timedelta(milliseconds=grace_ms)
        pending = sorted(
            (i for i in self._instants.values() if not i.delivered and i.at <= threshold),
            key=lambda i: i.at,
        )
        due: list[DueInstant] = []
        for instant in pending[:limit]:
            announcement = self._announcements[instant.announcement_id]
            due.append(
                DueInstant(
                    instant_id=instant.id,
                    at=instant.at,
                    announcement_id=announcement.id,
                    name=announcement.name,
                    message=announcement.message,
                )
            )
        return due

    async def mark_delivered(self, instant_id: str) -> None:
        instant = self._instants.get(instant_id)
        if instant is None:
            raise KeyError(f"Instante não encontrado: {instant_id}")
        if not instant.delivered:
            self._instants[instant_id] = instant.model_copy(update={"delivered": True})

    async def list_announcements_with_pending_counts(self) -> dict[str, int]:
        counts = dict.fromkeys(self._announcements, 0)
        for instant in self._instants.values():
            if not instant.delivered:
                counts[instant.announcement_id] += 1
        return counts

    async def delete_announcement_if_exhausted(self, announcement_id: str) -> bool:
        if announcement_id not in self._announcements:
            return False
        owned = [i for i in self._instants.values() if i.announcement_id == announcement_id]
        if any(not i.delivered for i in owned):
            return False
        for instant in owned:
            del self._instants[instant.id]
        del self._announcements[announcement_id]
        return True

    def get_announcements(self) -> list[Announcement]:
        """Retorna todos os anúncios (apenas para testes)."""
        return list(self._announcements.values())

    def get_instants(self, announcement_id: str | None = None) -> list[ScheduledInstant]:
        """Retorna instantes ordenados por at (apenas para testes)."""
        instants = [
            i
            for i in self._instants.values()
            if announcement_id is None or i.announcement_id == announcement_id
        ]
        return sorted(instants, key=lambda i: i.at)


class MemorySubscriberStore(SubscriberStoreProtocol):
    """Registro de assinantes em memória — apenas para dev/test."""

    def __init__(self) -> None:
        self._chat_ids: dict[str, None] = {}

    async def add(self, chat_id: str) -> None:
        self._chat_ids.setdefault(str(chat_id), None)

    async def all_chat_ids(self) -> list[str]:
        return list(self._chat_ids)


class MemoryQuestionStore(QuestionStoreProtocol):
    """Perguntas frequentes em memória — apenas para dev/test.

    A ordem de inserção do dict é a ordem de cadastro.
    """

    def __init__(self) -> None:
        self._questions: dict[str, Question] = {}

    async def create(self, draft: QuestionDraft) -> Question:
        question = Question(
            id=uuid4().hex,
            created_at=datetime.now(UTC),
            **draft.model_dump(),
        )
        self._questions[question.id] = question
        return question

    async def list_all(self) -> list[Question]:
        return list(self._questions.values())

    async def get(self, question_id: str) -> Question | None:
        return self._questions.get(question_id)

    async def delete(self, question_id: str) -> bool:
        return self._questions.pop(question_id, None) is not None
