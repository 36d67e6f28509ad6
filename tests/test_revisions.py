"""Tests for the revision snapshot policy."""

from datetime import datetime, timedelta, timezone

import pytest

from notetree import utils
from notetree.domain.label import Label
from notetree.domain.note import NoteRevision, NoteUpdate
from notetree.note_store.local import LocalNoteStore
from notetree.services.notes import NoteService
from notetree.services.revisions import RevisionSnapshotPolicy
from tests.fakes import OLD_DATE, FakeOptions, make_branch, make_note

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


def make_store(**note_kwargs) -> LocalNoteStore:
    return LocalNoteStore.from_data(
        notes=[make_note("note", content="before", **note_kwargs)],
        branches=[make_branch("b_note", "note", "root", 0)],
    )


def make_policy(store: LocalNoteStore, interval: int = 600) -> RevisionSnapshotPolicy:
    return RevisionSnapshotPolicy(store=store, options=FakeOptions(interval), clock=fixed_clock)


@pytest.mark.asyncio
async def test_snapshot_of_pre_update_state() -> None:
    store = make_store(title="Old title")
    service = NoteService(store=store, options=FakeOptions(), revision_policy=make_policy(store))

    await service.update_note("note", NoteUpdate(title="New title", content="after"))

    revisions = await store.get_revisions("note")
    assert len(revisions) == 1, "One revision should be taken before the update"
    revision = revisions[0]
    assert revision.title == "Old title"
    assert revision.content == "before"
    assert revision.date_modified_from == OLD_DATE
    assert revision.date_modified_to == utils.date_str(NOW)
    assert revision.is_protected is False


@pytest.mark.asyncio
async def test_no_second_snapshot_within_interval() -> None:
    store = make_store()
    service = NoteService(store=store, options=FakeOptions(), revision_policy=make_policy(store))

    await service.update_note("note", NoteUpdate(content="one"))
    await service.update_note("note", NoteUpdate(content="two"))

    assert len(await store.get_revisions("note")) == 1


@pytest.mark.asyncio
async def test_existing_fresh_revision_skips_snapshot() -> None:
    store = make_store()
    fresh = NoteRevision(
        note_revision_id="fresh",
        note_id="note",
        title="t",
        content="c",
        date_modified_from=OLD_DATE,
        date_modified_to=utils.date_str(NOW - timedelta(seconds=599)),
    )
    await store.update_entity(fresh)

    assert await make_policy(store).save_note_revision(await store.get_note("note")) is None


@pytest.mark.asyncio
async def test_expired_revision_allows_snapshot() -> None:
    store = make_store()
    expired = NoteRevision(
        note_revision_id="expired",
        note_id="note",
        title="t",
        content="c",
        date_modified_from=OLD_DATE,
        date_modified_to=utils.date_str(NOW - timedelta(seconds=601)),
    )
    await store.update_entity(expired)

    revision = await make_policy(store).save_note_revision(await store.get_note("note"))

    assert revision is not None
    assert len(await store.get_revisions("note")) == 2


@pytest.mark.asyncio
async def test_revision_of_other_note_does_not_count() -> None:
    store = make_store()
    await store.update_entity(
        NoteRevision(
            note_revision_id="other",
            note_id="someone_else",
            title="t",
            content="c",
            date_modified_to=utils.date_str(NOW),
        )
    )

    assert await make_policy(store).should_snapshot(await store.get_note("note")) is True


@pytest.mark.asyncio
async def test_young_note_is_not_versioned() -> None:
    store = make_store(date_created=utils.date_str(NOW - timedelta(seconds=30)))

    assert await make_policy(store).should_snapshot(await store.get_note("note")) is False


@pytest.mark.asyncio
async def test_interval_is_read_from_options() -> None:
    store = make_store(date_created=utils.date_str(NOW - timedelta(seconds=30)))

    policy = make_policy(store, interval=10)

    assert await policy.should_snapshot(await store.get_note("note")) is True


@pytest.mark.asyncio
async def test_disable_versioning_label() -> None:
    store = LocalNoteStore.from_data(
        notes=[make_note("note")],
        labels=[Label(label_id="l1", note_id="note", name="disable_versioning", value="true")],
    )

    assert await make_policy(store).save_note_revision(await store.get_note("note")) is None
    assert await store.get_revisions("note") == []


@pytest.mark.asyncio
async def test_disable_versioning_other_value_still_versions() -> None:
    store = LocalNoteStore.from_data(
        notes=[make_note("note")],
        labels=[Label(label_id="l1", note_id="note", name="disable_versioning", value="false")],
    )

    assert await make_policy(store).should_snapshot(await store.get_note("note")) is True


@pytest.mark.asyncio
async def test_file_note_is_not_versioned() -> None:
    store = make_store(type="file", mime="image/png")

    assert await make_policy(store).should_snapshot(await store.get_note("note")) is False
