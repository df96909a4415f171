"""Firestore Question Store — perguntas frequentes do RH.

Layout:
    questions/{question_id}
        question, answer, document, created_at

created_at é gerado no cliente para que create devolva o registro
completo sem nova leitura; list_all ordena por esse campo.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore

from app.domain.question import Question
from app.protocols.question_store import QuestionStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.question import QuestionDraft

logger = logging.getLogger(__name__)

QUESTIONS_COLLECTION = "questions"


def _from_document(doc_id: str, data: dict[str, Any]) -> Question:
    return Question(
        id=doc_id,
        question=data.get("question", ""),
        answer=data.get("answer", ""),
        document=data.get("document"),
        created_at=data["created_at"],
    )


class FirestoreQuestionStore(QuestionStoreProtocol):
    """Store de perguntas usando Firestore.

    Args:
        firestore_client: Cliente Firestore
        collection: Collection de perguntas
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection: str = QUESTIONS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection

    async def create(self, draft: QuestionDraft) -> Question:
        return await asyncio.to_thread(self._create_sync, draft)

    async def list_all(self) -> list[Question]:
        return await asyncio.to_thread(self._list_sync)

    async def get(self, question_id: str) -> Question | None:
        return await asyncio.to_thread(self._get_sync, question_id)

    async def delete(self, question_id: str) -> bool:
        return await asyncio.to_thread(self._delete_sync, question_id)

    # ──────────────────────────────────────────────────────────────
    # Sync backend
    # ──────────────────────────────────────────────────────────────

    def _create_sync(self, draft: QuestionDraft) -> Question:
        doc_ref = self._db.collection(self._collection).document()
        data = {**draft.model_dump(), "created_at": datetime.now(UTC)}
        try:
            doc_ref.set(data)
        except GoogleAPIError as exc:
            logger.error("question_create_error", extra={"error_type": type(exc).__name__})
            raise FirestoreUnavailableError("Falha ao cadastrar pergunta no Firestore") from exc
        logger.info("question_created", extra={"question_id": doc_ref.id})
        return _from_document(doc_ref.id, data)

    def _list_sync(self) -> list[Question]:
        query = self._db.collection(self._collection).order_by(
            "created_at", direction=firestore.Query.ASCENDING
        )
        try:
            docs = list(query.stream())
        except GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao listar perguntas no Firestore") from exc
        return [_from_document(doc.id, doc.to_dict() or {}) for doc in docs]

    def _get_sync(self, question_id: str) -> Question | None:
        try:
            snapshot = self._db.collection(self._collection).document(question_id).get()
        except GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao ler pergunta no Firestore") from exc
        if not snapshot.exists:
            return None
        return _from_document(snapshot.id, snapshot.to_dict() or {})

    def _delete_sync(self, question_id: str) -> bool:
        doc_ref = self._db.collection(self._collection).document(question_id)
        try:
            if not doc_ref.get().exists:
                return False
            doc_ref.delete()
        except GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao remover pergunta no Firestore") from exc
        logger.info("question_deleted", extra={"question_id": question_id})
        return True
