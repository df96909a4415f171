"""Protocolo de persistência de anúncios e instantes agendados."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from app.domain.announcement import DueInstant


class AnnouncementStoreProtocol(ABC):
    """Contrato assíncrono consumido pela importação e pelo scheduler.

    Invariantes que toda implementação deve manter:
    - create_announcement_with_instants é atômico (tudo ou nada).
    - delivered só vai de False para True.
    - Remover um anúncio remove também seus instantes.
    """

    @abstractmethod
    async def create_announcement_with_instants(
        self,
        name: str,
        message: str,
        instants: Sequence[datetime],
    ) -> str:
        """Cria anúncio e todos os seus instantes atomicamente.

        Returns:
            ID do anúncio criado.
        """

    @abstractmethod
    async def find_due(
        self,
        now: datetime,
        grace_ms: int,
        limit: int,
    ) -> list[DueInstant]:
        """Instantes pendentes com at <= now + grace_ms, em ordem crescente de at."""

    @abstractmethod
    async def mark_delivered(self, instant_id: str) -> None:
        """Marca instante como entregue (idempotente)."""

    @abstractmethod
    async def list_announcements_with_pending_counts(self) -> dict[str, int]:
        """Mapa announcement_id -> quantidade de instantes pendentes."""

    @abstractmethod
    async def delete_announcement_if_exhausted(self, announcement_id: str) -> bool:
        """Remove o anúncio (e instantes) se não houver pendentes.

        Returns:
            True se removeu.
        """
