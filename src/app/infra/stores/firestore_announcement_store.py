"""Firestore Announcement Store — anúncios e instantes agendados.

Layout:
    announcements/{announcement_id}
        name, message, pending_count, created_at
    scheduled_instants/{instant_id}
        announcement_id, at, delivered, name, message

name/message são copiados para o instante (anúncios nunca mudam), o que
permite responder find_due com uma única query. pending_count é mantido
na mesma transação que marca o instante como entregue.

O anúncio e todos os seus instantes são gravados em uma transação: o SDK
acumula as escritas e o commit é a unidade atômica.

A query de find_due exige índice composto (delivered ASC, at ASC).

O SDK Python do Firestore é síncrono; cada operação roda em
asyncio.to_thread para não bloquear o event loop.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from app.domain.announcement import DueInstant
from app.protocols.announcement_store import AnnouncementStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from google.cloud.firestore import Client as FirestoreClient
    from google.cloud.firestore import DocumentReference, Transaction

logger = logging.getLogger(__name__)

ANNOUNCEMENTS_COLLECTION = "announcements"
INSTANTS_COLLECTION = "scheduled_instants"


@firestore.transactional
def _create_in_transaction(
    transaction: Transaction,
    announcement_ref: DocumentReference,
    instants_collection: Any,
    name: str,
    message: str,
    instants: Sequence[datetime],
) -> None:
    transaction.set(
        announcement_ref,
        {
            "name": name,
            "message": message,
            "pending_count": len(instants),
            "created_at": firestore.SERVER_TIMESTAMP,
        },
    )
    for at in instants:
        transaction.set(
            instants_collection.document(),
            {
                "announcement_id": announcement_ref.id,
                "at": at.astimezone(UTC),
                "delivered": False,
                "name": name,
                "message": message,
            },
        )


@firestore.transactional
def _mark_delivered_in_transaction(
    transaction: Transaction,
    instant_ref: DocumentReference,
    announcements_collection: Any,
) -> bool:
    snapshot = instant_ref.get(transaction=transaction)
    if not snapshot.exists:
        raise KeyError(f"Instante não encontrado: {instant_ref.id}")
    data = snapshot.to_dict() or {}
    if data.get("delivered"):
        return False
    transaction.update(
        instant_ref,
        {"delivered": True, "delivered_at": firestore.SERVER_TIMESTAMP},
    )
    transaction.update(
        announcements_collection.document(data["announcement_id"]),
        {"pending_count": firestore.Increment(-1)},
    )
    return True


@firestore.transactional
def _delete_if_exhausted_in_transaction(
    transaction: Transaction,
    announcement_ref: DocumentReference,
    instants_collection: Any,
) -> bool:
    snapshot = announcement_ref.get(transaction=transaction)
    if not snapshot.exists:
        return False
    if int((snapshot.to_dict() or {}).get("pending_count", 0)) > 0:
        return False
    owned = instants_collection.where(
        filter=FieldFilter("announcement_id", "==", announcement_ref.id)
    ).stream(transaction=transaction)
    for instant in owned:
        transaction.delete(instant.reference)
    transaction.delete(announcement_ref)
    return True


class FirestoreAnnouncementStore(AnnouncementStoreProtocol):
    """Store de anúncios usando Firestore.

    Args:
        firestore_client: Cliente Firestore
        announcements_collection: Collection de anúncios
        instants_collection: Collection de instantes
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        announcements_collection: str = ANNOUNCEMENTS_COLLECTION,
        instants_collection: str = INSTANTS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._announcements = announcements_collection
        self._instants = instants_collection

    # ──────────────────────────────────────────────────────────────
    # Async API (AnnouncementStoreProtocol)
    # ──────────────────────────────────────────────────────────────

    async def create_announcement_with_instants(
        self,
        name: str,
        message: str,
        instants: Sequence[datetime],
    ) -> str:
        return await asyncio.to_thread(self._create_sync, name, message, list(instants))

    async def find_due(
        self,
        now: datetime,
        grace_ms: int,
        limit: int,
    ) -> list[DueInstant]:
        return await asyncio.to_thread(self._find_due_sync, now, grace_ms, limit)

    async def mark_delivered(self, instant_id: str) -> None:
        await asyncio.to_thread(self._mark_delivered_sync, instant_id)

    async def list_announcements_with_pending_counts(self) -> dict[str, int]:
        return await asyncio.to_thread(self._pending_counts_sync)

    async def delete_announcement_if_exhausted(self, announcement_id: str) -> bool:
        return await asyncio.to_thread(self._delete_if_exhausted_sync, announcement_id)

    # ──────────────────────────────────────────────────────────────
    # Sync backend
    # ──────────────────────────────────────────────────────────────

    def _create_sync(self, name: str, message: str, instants: list[datetime]) -> str:
        announcement_ref = self._db.collection(self._announcements).document()
        try:
            _create_in_transaction(
                self._db.transaction(),
                announcement_ref,
                self._db.collection(self._instants),
                name,
                message,
                instants,
            )
        except GoogleAPIError as exc:
            logger.error(
                "announcement_create_error",
                extra={"error_type": type(exc).__name__, "instant_count": len(instants)},
            )
            raise FirestoreUnavailableError("Falha ao criar anúncio no Firestore") from exc
        logger.debug(
            "announcement_created",
            extra={"announcement_id": announcement_ref.id, "instant_count": len(instants)},
        )
        return announcement_ref.id

    def _find_due_sync(self, now: datetime, grace_ms: int, limit: int) -> list[DueInstant]:
        threshold = now.astimezone(UTC) + timedelta(milliseconds=grace_ms)
        query = (
            self._db.collection(self._instants)
            .where(filter=FieldFilter("delivered", "==", False))
            .where(filter=FieldFilter("at", "<=", threshold))
            .order_by("at")
            .limit(limit)
        )
        try:
            docs = list(query.stream())
        except GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao consultar instantes no Firestore") from exc

        due: list[DueInstant] = []
        for doc in docs:
            data = doc.to_dict() or {}
            due.append(
                DueInstant(
                    instant_id=doc.id,
                    at=data["at"],
                    announcement_id=data["announcement_id"],
                    name=data.get("name", ""),
                    message=data.get("message", ""),
                )
            )
        return due

    def _mark_delivered_sync(self, instant_id: str) -> None:
        try:
            changed = _mark_delivered_in_transaction(
                self._db.transaction(),
                self._db.collection(self._instants).document(instant_id),
                self._db.collection(self._announcements),
            )
        except GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao marcar instante no Firestore") from exc
        if not changed:
            logger.debug("instant_already_delivered", extra={"instant_id": instant_id})

    def _pending_counts_sync(self) -> dict[str, int]:
        try:
            docs = self._db.collection(self._announcements).select(["pending_count"]).stream()
            return {
                doc.id: int((doc.to_dict() or {}).get("pending_count", 0)) for doc in docs
            }
        except GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao listar anúncios no Firestore") from exc

    def _delete_if_exhausted_sync(self, announcement_id: str) -> bool:
        try:
            return _delete_if_exhausted_in_transaction(
                self._db.transaction(),
                self._db.collection(self._announcements).document(announcement_id),
                self._db.collection(self._instants),
            )
        except GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao remover anúncio no Firestore") from exc
