"""Unit tests for the AdvertStore service, backed by the in-memory document store."""
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from advert_api.application.interfaces.document_store import DocumentStoreError
from advert_api.application.services.advert_store import AdvertStore
from advert_api.domain.entities.advert import Activate, Advert, AdvertSubmission, Reject
from advert_api.domain.enums.advert_status import AdvertStatus
from advert_api.domain.results import AdvertOperationError, ErrorKind
from advert_api.infrastructure.database.document_store import SqlAlchemyDocumentStore
from advert_api.infrastructure.memory.document_store import InMemoryDocumentStore

_LOGGER = "advert_api.application.services.advert_store.logger"


def _make_failing_store(error: Exception | None = None) -> MagicMock:
    error = error or DocumentStoreError("connection refused")
    store = MagicMock()
    store.load = AsyncMock(side_effect=error)
    store.save = AsyncMock(side_effect=error)
    store.delete = AsyncMock(side_effect=error)
    store.scan_all = AsyncMock(side_effect=error)
    store.check_health = AsyncMock(side_effect=error)
    return store


def _make_unreachable_database() -> SqlAlchemyDocumentStore:
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(
        side_effect=ConnectionRefusedError(111, "Connect call failed")
    )
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return SqlAlchemyDocumentStore(factory)


@pytest.fixture()
def documents() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def store(documents: InMemoryDocumentStore) -> AdvertStore:
    return AdvertStore(documents)


class TestCreate:
    @pytest.mark.asyncio
    async def test_returns_fresh_ids(self, store: AdvertStore) -> None:
        ids = [
            (await store.create(AdvertSubmission(title=f"Advert {i}"))).unwrap()
            for i in range(20)
        ]
        assert len(set(ids)) == 20

    @pytest.mark.asyncio
    async def test_persists_pending_record_without_file_path(self, store: AdvertStore) -> None:
        advert_id = (await store.create(AdvertSubmission(title="Bike"))).unwrap()

        advert = (await store.get_by_id(advert_id)).unwrap()
        assert advert.status == AdvertStatus.PENDING
        assert advert.file_path is None
        assert advert.title == "Bike"

    @pytest.mark.asyncio
    async def test_invalid_submission_is_not_persisted(
        self, store: AdvertStore, documents: InMemoryDocumentStore
    ) -> None:
        result = await store.create(AdvertSubmission(title=""))

        assert result.ok is False
        assert result.error is not None
        assert result.error.kind == ErrorKind.INVALID
        assert len(documents) == 0

    @pytest.mark.asyncio
    async def test_honours_configured_required_fields(self, documents: InMemoryDocumentStore) -> None:
        store = AdvertStore(documents, required_fields=["title", "description"])
        result = await store.create(AdvertSubmission(title="Bike"))
        assert result.error is not None
        assert result.error.kind == ErrorKind.INVALID
        assert "description" in result.error.message

    @pytest.mark.asyncio
    async def test_store_failure_is_transient(self) -> None:
        store = AdvertStore(_make_failing_store())
        result = await store.create(AdvertSubmission(title="Bike", price=Decimal("10")))
        assert result.error is not None
        assert result.error.kind == ErrorKind.TRANSIENT
        assert result.error.kind.retryable is True

    @pytest.mark.asyncio
    async def test_refused_database_connection_is_transient(self) -> None:
        result = await AdvertStore(_make_unreachable_database()).create(AdvertSubmission(title="Bike"))
        assert result.error is not None
        assert result.error.kind == ErrorKind.TRANSIENT

    @pytest.mark.asyncio
    async def test_values_exceeding_column_limits_are_invalid(
        self, store: AdvertStore, documents: InMemoryDocumentStore
    ) -> None:
        for submission in (
            AdvertSubmission(title="x" * 513),
            AdvertSubmission(title="Bike", price=Decimal("1e12")),
        ):
            result = await store.create(submission)
            assert result.error is not None
            assert result.error.kind == ErrorKind.INVALID
        assert len(documents) == 0


class TestConfirm:
    @pytest.mark.asyncio
    async def test_activate_pending_record(self, store: AdvertStore) -> None:
        advert_id = (await store.create(AdvertSubmission(title="Bike"))).unwrap()

        result = await store.confirm(advert_id, Activate("/files/x.png"))

        assert result.ok
        advert = (await store.get_by_id(advert_id)).unwrap()
        assert advert.status == AdvertStatus.ACTIVE
        assert advert.file_path == "/files/x.png"

    @pytest.mark.asyncio
    async def test_reject_removes_record(self, store: AdvertStore) -> None:
        advert_id = (await store.create(AdvertSubmission(title="Car"))).unwrap()

        result = await store.confirm(advert_id, Reject())

        assert result.ok
        lookup = await store.get_by_id(advert_id)
        assert lookup.error is not None
        assert lookup.error.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, store: AdvertStore) -> None:
        for outcome in (Activate("/files/x.png"), Reject()):
            result = await store.confirm("missing-id", outcome)
            assert result.error is not None
            assert result.error.kind == ErrorKind.NOT_FOUND
            assert result.error.advert_id == "missing-id"

    @pytest.mark.asyncio
    async def test_confirming_rejected_record_again_is_not_found(self, store: AdvertStore) -> None:
        advert_id = (await store.create(AdvertSubmission(title="Car"))).unwrap()
        await store.confirm(advert_id, Reject())

        result = await store.confirm(advert_id, Activate("/files/x.png"))

        assert result.error is not None
        assert result.error.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_second_activation_overwrites(self, store: AdvertStore) -> None:
        advert_id = (await store.create(AdvertSubmission(title="Bike"))).unwrap()
        await store.confirm(advert_id, Activate("/files/x.png"))

        result = await store.confirm(advert_id, Activate("/files/y.png"))

        assert result.ok
        advert = (await store.get_by_id(advert_id)).unwrap()
        assert advert.status == AdvertStatus.ACTIVE
        assert advert.file_path == "/files/y.png"

    @pytest.mark.asyncio
    async def test_rejecting_active_record_is_invalid(self, store: AdvertStore) -> None:
        advert_id = (await store.create(AdvertSubmission(title="Bike"))).unwrap()
        await store.confirm(advert_id, Activate("/files/x.png"))

        result = await store.confirm(advert_id, Reject())

        assert result.error is not None
        assert result.error.kind == ErrorKind.INVALID
        assert (await store.get_by_id(advert_id)).unwrap().status == AdvertStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_refused_rejection_of_active_record_is_logged(self, store: AdvertStore) -> None:
        advert_id = (await store.create(AdvertSubmission(title="Bike"))).unwrap()
        await store.confirm(advert_id, Activate("/files/x.png"))

        with patch(_LOGGER) as mock_logger:
            await store.confirm(advert_id, Reject())

        mock_logger.info.assert_any_call(
            "advert_confirm_refused",
            advert_id=advert_id,
            from_status="Active",
            to_status="Deleted",
        )

    @pytest.mark.asyncio
    async def test_reactivation_is_logged_with_previous_file_path(self, store: AdvertStore) -> None:
        advert_id = (await store.create(AdvertSubmission(title="Bike"))).unwrap()
        await store.confirm(advert_id, Activate("/files/x.png"))

        with patch(_LOGGER) as mock_logger:
            await store.confirm(advert_id, Activate("/files/y.png"))

        mock_logger.info.assert_any_call(
            "advert_reactivated",
            advert_id=advert_id,
            previous_file_path="/files/x.png",
        )

    @pytest.mark.asyncio
    async def test_first_activation_is_not_logged_as_reactivation(self, store: AdvertStore) -> None:
        advert_id = (await store.create(AdvertSubmission(title="Bike"))).unwrap()

        with patch(_LOGGER) as mock_logger:
            await store.confirm(advert_id, Activate("/files/x.png"))

        events = [call.args[0] for call in mock_logger.info.call_args_list]
        assert "advert_reactivated" not in events

    @pytest.mark.asyncio
    async def test_activation_without_file_path_is_invalid(self, store: AdvertStore) -> None:
        advert_id = (await store.create(AdvertSubmission(title="Bike"))).unwrap()

        result = await store.confirm(advert_id, Activate(""))

        assert result.error is not None
        assert result.error.kind == ErrorKind.INVALID
        assert (await store.get_by_id(advert_id)).unwrap().status == AdvertStatus.PENDING

    @pytest.mark.asyncio
    async def test_store_failure_is_transient(self) -> None:
        store = AdvertStore(_make_failing_store())
        result = await store.confirm("some-id", Activate("/files/x.png"))
        assert result.error is not None
        assert result.error.kind == ErrorKind.TRANSIENT

    @pytest.mark.asyncio
    async def test_save_failure_after_load_is_transient(self) -> None:
        pending = Advert(title="Bike")
        documents = MagicMock()
        documents.load = AsyncMock(return_value=pending)
        documents.save = AsyncMock(side_effect=DocumentStoreError("write timed out"))
        store = AdvertStore(documents)

        result = await store.confirm(pending.id, Activate("/files/x.png"))

        assert result.error is not None
        assert result.error.kind == ErrorKind.TRANSIENT
        assert "write timed out" in result.error.message


class TestGetById:
    @pytest.mark.asyncio
    async def test_missing_id_is_not_found(self, store: AdvertStore) -> None:
        result = await store.get_by_id("missing-id")
        assert result.error is not None
        assert result.error.kind == ErrorKind.NOT_FOUND
        with pytest.raises(AdvertOperationError):
            result.unwrap()

    @pytest.mark.asyncio
    async def test_store_failure_is_transient(self) -> None:
        result = await AdvertStore(_make_failing_store()).get_by_id("some-id")
        assert result.error is not None
        assert result.error.kind == ErrorKind.TRANSIENT


class TestGetAll:
    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_list(self, store: AdvertStore) -> None:
        assert (await store.get_all()).unwrap() == []

    @pytest.mark.asyncio
    async def test_reflects_active_pending_and_rejected(self, store: AdvertStore) -> None:
        a = (await store.create(AdvertSubmission(title="A"))).unwrap()
        b = (await store.create(AdvertSubmission(title="B"))).unwrap()
        c = (await store.create(AdvertSubmission(title="C"))).unwrap()
        await store.confirm(a, Activate("/files/a.png"))
        await store.confirm(c, Reject())

        adverts = {advert.id: advert for advert in (await store.get_all()).unwrap()}

        assert set(adverts) == {a, b}
        assert adverts[a].status == AdvertStatus.ACTIVE
        assert adverts[b].status == AdvertStatus.PENDING

    @pytest.mark.asyncio
    async def test_file_path_set_only_for_active(self, store: AdvertStore) -> None:
        a = (await store.create(AdvertSubmission(title="A"))).unwrap()
        await store.create(AdvertSubmission(title="B"))
        await store.confirm(a, Activate("/files/a.png"))

        for advert in (await store.get_all()).unwrap():
            assert (advert.file_path is not None) == (advert.status == AdvertStatus.ACTIVE)

    @pytest.mark.asyncio
    async def test_store_failure_is_transient(self) -> None:
        result = await AdvertStore(_make_failing_store()).get_all()
        assert result.error is not None
        assert result.error.kind == ErrorKind.TRANSIENT


class TestCheckHealth:
    @pytest.mark.asyncio
    async def test_healthy_store(self, store: AdvertStore) -> None:
        assert await store.check_health() is True

    @pytest.mark.asyncio
    async def test_unreachable_store(self) -> None:
        assert await AdvertStore(_make_failing_store()).check_health() is False

    @pytest.mark.asyncio
    async def test_refused_database_connection_is_unhealthy(self) -> None:
        assert await AdvertStore(_make_unreachable_database()).check_health() is False
