"""Testes do FirestoreAnnouncementStore com cliente mockado."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import ServiceUnavailable

from app.infra.stores import firestore_announcement_store as module
from app.infra.stores.firestore_announcement_store import FirestoreAnnouncementStore
from utils.errors import FirestoreUnavailableError

NOW = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


def _doc(doc_id: str, data: dict[str, object]) -> MagicMock:
    doc = MagicMock()
    doc.id = doc_id
    doc.to_dict.return_value = data
    return doc


class TestCreate:
    """Testes de create_announcement_with_instants."""

    @pytest.mark.asyncio
    async def test_runs_transaction_and_returns_id(self, monkeypatch: pytest.MonkeyPatch) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.id = "ann-1"
        create_tx = MagicMock()
        monkeypatch.setattr(module, "_create_in_transaction", create_tx)
        store = FirestoreAnnouncementStore(db)

        announcement_id = await store.create_announcement_with_instants("A", "m", (NOW,))

        assert announcement_id == "ann-1"
        args = create_tx.call_args.args
        assert args[3:] == ("A", "m", [NOW])

    @pytest.mark.asyncio
    async def test_api_error_is_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            module, "_create_in_transaction", MagicMock(side_effect=ServiceUnavailable("down"))
        )
        store = FirestoreAnnouncementStore(MagicMock())

        with pytest.raises(FirestoreUnavailableError):
            await store.create_announcement_with_instants("A", "m", [NOW])


class TestQueries:
    """Testes de find_due e pending counts."""

    @pytest.mark.asyncio
    async def test_find_due_maps_documents(self) -> None:
        db = MagicMock()
        query = db.collection.return_value.where.return_value.where.return_value
        query.order_by.return_value.limit.return_value.stream.return_value = [
            _doc(
                "i1",
                {"at": NOW, "announcement_id": "a1", "delivered": False, "name": "A", "message": "m"},
            )
        ]
        store = FirestoreAnnouncementStore(db, instants_collection="inst")

        [due] = await store.find_due(NOW, 0, 25)

        assert (due.instant_id, due.announcement_id, due.name, due.message) == ("i1", "a1", "A", "m")
        assert due.at == NOW
        db.collection.assert_called_with("inst")
        query.order_by.assert_called_once_with("at")
        query.order_by.return_value.limit.assert_called_once_with(25)

    @pytest.mark.asyncio
    async def test_find_due_error_is_wrapped(self) -> None:
        db = MagicMock()
        query = db.collection.return_value.where.return_value.where.return_value
        query.order_by.return_value.limit.return_value.stream.side_effect = ServiceUnavailable("x")
        store = FirestoreAnnouncementStore(db)

        with pytest.raises(FirestoreUnavailableError):
            await store.find_due(NOW, 0, 10)

    @pytest.mark.asyncio
    async def test_pending_counts(self) -> None:
        db = MagicMock()
        db.collection.return_value.select.return_value.stream.return_value = [
            _doc("a1", {"pending_count": 2}),
            _doc("a2", {"pending_count": 0}),
            _doc("a3", {}),
        ]
        store = FirestoreAnnouncementStore(db)

        assert await store.list_announcements_with_pending_counts() == {"a1": 2, "a2": 0, "a3": 0}


class TestTransactions:
    """Testes da lógica executada dentro das transações."""

    def test_transaction_writes_announcement_and_every_instant(self) -> None:
        transaction = MagicMock()
        announcement_ref = MagicMock()
        announcement_ref.id = "a1"
        instants = MagicMock()
        moments = [NOW, NOW.replace(hour=10), NOW.replace(hour=11)]

        module._create_in_transaction.to_wrap(
            transaction, announcement_ref, instants, "A", "m", moments
        )

        assert transaction.set.call_count == 1 + len(moments)
        announcement_data = transaction.set.call_args_list[0].args[1]
        assert announcement_data["pending_count"] == 3
        written = [c.args[1] for c in transaction.set.call_args_list[1:]]
        assert [w["at"] for w in written] == moments
        assert all(w["announcement_id"] == "a1" and w["delivered"] is False for w in written)

    def test_mark_delivered_decrements_pending(self) -> None:
        transaction = MagicMock()
        instant_ref = MagicMock()
        instant_ref.get.return_value = MagicMock(exists=True)
        instant_ref.get.return_value.to_dict.return_value = {
            "announcement_id": "a1",
            "delivered": False,
        }
        announcements = MagicMock()

        changed = module._mark_delivered_in_transaction.to_wrap(
            transaction, instant_ref, announcements
        )

        assert changed is True
        assert transaction.update.call_count == 2
        announcements.document.assert_called_once_with("a1")

    def test_mark_delivered_already_delivered_is_noop(self) -> None:
        transaction = MagicMock()
        instant_ref = MagicMock()
        instant_ref.get.return_value = MagicMock(exists=True)
        instant_ref.get.return_value.to_dict.return_value = {
            "announcement_id": "a1",
            "delivered": True,
        }

        changed = module._mark_delivered_in_transaction.to_wrap(
            transaction, instant_ref, MagicMock()
        )

        assert changed is False
        transaction.update.assert_not_called()

    def test_mark_delivered_missing_raises(self) -> None:
        instant_ref = MagicMock()
        instant_ref.get.return_value = MagicMock(exists=False)

        with pytest.raises(KeyError):
            module._mark_delivered_in_transaction.to_wrap(MagicMock(), instant_ref, MagicMock())

    def test_delete_skips_when_pending(self) -> None:
        transaction = MagicMock()
        announcement_ref = MagicMock()
        announcement_ref.get.return_value = MagicMock(exists=True)
        announcement_ref.get.return_value.to_dict.return_value = {"pending_count": 1}

        deleted = module._delete_if_exhausted_in_transaction.to_wrap(
            transaction, announcement_ref, MagicMock()
        )

        assert deleted is False
        transaction.delete.assert_not_called()

    def test_delete_removes_instants_and_announcement(self) -> None:
        transaction = MagicMock()
        announcement_ref = MagicMock()
        announcement_ref.get.return_value = MagicMock(exists=True)
        announcement_ref.get.return_value.to_dict.return_value = {"pending_count": 0}
        instants = MagicMock()
        instants.where.return_value.stream.return_value = [MagicMock(), MagicMock()]

        deleted = module._delete_if_exhausted_in_transaction.to_wrap(
            transaction, announcement_ref, instants
        )

        assert deleted is True
        assert transaction.delete.call_count == 3
        transaction.delete.assert_called_with(announcement_ref)
