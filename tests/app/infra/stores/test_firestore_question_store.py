"""Testes do FirestoreQuestionStore com cliente mockado."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import ServiceUnavailable

from app.domain.question import QuestionDraft
from app.infra.stores.firestore_question_store import FirestoreQuestionStore
from utils.errors import FirestoreUnavailableError

CREATED = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


def _doc(doc_id: str, data: dict[str, object], *, exists: bool = True) -> MagicMock:
    doc = MagicMock()
    doc.id = doc_id
    doc.exists = exists
    doc.to_dict.return_value = data
    return doc


class TestCreate:
    """Testes de create."""

    @pytest.mark.asyncio
    async def test_writes_document_and_returns_question(self) -> None:
        db = MagicMock()
        doc_ref = db.collection.return_value.document.return_value
        doc_ref.id = "q1"
        store = FirestoreQuestionStore(db, collection="faq")

        question = await store.create(
            QuestionDraft(question="Como pedir férias?", answer="Pelo portal.", document="RH-01")
        )

        db.collection.assert_called_with("faq")
        written = doc_ref.set.call_args.args[0]
        assert written["question"] == "Como pedir férias?"
        assert written["document"] == "RH-01"
        assert question.id == "q1"
        assert question.created_at == written["created_at"]

    @pytest.mark.asyncio
    async def test_api_error_is_wrapped(self) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.set.side_effect = ServiceUnavailable("x")
        store = FirestoreQuestionStore(db)

        with pytest.raises(FirestoreUnavailableError):
            await store.create(QuestionDraft(question="q", answer="a"))


class TestReads:
    """Testes de list_all e get."""

    @pytest.mark.asyncio
    async def test_list_orders_by_created_at(self) -> None:
        db = MagicMock()
        query = db.collection.return_value.order_by.return_value
        query.stream.return_value = [
            _doc("q1", {"question": "q1", "answer": "a1", "created_at": CREATED}),
            _doc(
                "q2",
                {"question": "q2", "answer": "a2", "document": "d", "created_at": CREATED},
            ),
        ]
        store = FirestoreQuestionStore(db)

        questions = await store.list_all()

        assert [q.id for q in questions] == ["q1", "q2"]
        assert questions[1].document == "d"
        assert db.collection.return_value.order_by.call_args.args == ("created_at",)

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.get.return_value = _doc(
            "q9", {}, exists=False
        )

        assert await FirestoreQuestionStore(db).get("q9") is None

    @pytest.mark.asyncio
    async def test_get_existing(self) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.get.return_value = _doc(
            "q1", {"question": "q", "answer": "a", "created_at": CREATED}
        )

        question = await FirestoreQuestionStore(db).get("q1")

        assert question is not None
        assert (question.id, question.answer) == ("q1", "a")

    @pytest.mark.asyncio
    async def test_list_error_is_wrapped(self) -> None:
        db = MagicMock()
        db.collection.return_value.order_by.return_value.stream.side_effect = ServiceUnavailable(
            "x"
        )

        with pytest.raises(FirestoreUnavailableError):
            await FirestoreQuestionStore(db).list_all()


class TestDelete:
    """Testes de delete."""

    @pytest.mark.asyncio
    async def test_deletes_existing(self) -> None:
        db = MagicMock()
        doc_ref = db.collection.return_value.document.return_value
        doc_ref.get.return_value = _doc("q1", {})

        assert await FirestoreQuestionStore(db).delete("q1") is True
        doc_ref.delete.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_missing_is_false(self) -> None:
        db = MagicMock()
        doc_ref = db.collection.return_value.document.return_value
        doc_ref.get.return_value = _doc("q1", {}, exists=False)

        assert await FirestoreQuestionStore(db).delete("q1") is False
        doc_ref.delete.assert_not_called()
