"""Exceções de domínio e de infraestrutura compartilhadas."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class FirestoreUnavailableError(InfrastructureError):
    """Falha de indisponibilidade ao acessar Firestore."""


class TelegramDeliveryError(InfrastructureError):
    """Falha ao enviar mensagem pela Telegram Bot API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class IngestionError(Exception):
    """Base para falhas de importação de planilha."""



class AnnouncementPersistError(IngestionError):
    """Falha ao persistir um anúncio e seus instantes.

    Anúncios gravados antes da falha permanecem persistidos; os contadores
    refletem apenas o que foi efetivamente gravado.
    """

    def __init__(
        self,
        message: str,
        *,
        announcements_created: int,
        instants_created: int,
    ) -> None:
        super().__init__(message)
        self.announcements_created = announcements_created
        self.instants_created = instants_created
