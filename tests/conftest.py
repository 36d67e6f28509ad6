import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from notetree.api import create_app
from notetree.domain.note import Branch, Note
from notetree.note_store.local import LocalNoteStore
from notetree.options import Options
from notetree.services.notes import NoteService
from tests.fakes import FakeOptions, make_branch, make_note


@pytest.fixture
def test_notes() -> list[Note]:
    """A small tree: root > parent > (child_a, child_b), child_a > grandchild."""
    return [
        make_note("parent"),
        make_note("child_a"),
        make_note("child_b"),
        make_note("grandchild"),
    ]


@pytest.fixture
def test_branches() -> list[Branch]:
    return [
        make_branch("b_parent", "parent", "root", 0),
        make_branch("b_child_a", "child_a", "parent", 0),
        make_branch("b_child_b", "child_b", "parent", 1),
        make_branch("b_grandchild", "grandchild", "child_a", 0),
    ]


@pytest.fixture
def store(test_notes: list[Note], test_branches: list[Branch]) -> LocalNoteStore:
    return LocalNoteStore.from_data(notes=test_notes, branches=test_branches)


@pytest.fixture
def empty_store() -> LocalNoteStore:
    return LocalNoteStore()


@pytest.fixture
def fake_options() -> Options:
    return FakeOptions(snapshot_interval=600)


@pytest.fixture
def note_service(store: LocalNoteStore, fake_options: Options) -> NoteService:
    return NoteService(store=store, options=fake_options)


@pytest.fixture
def test_client(note_service: NoteService) -> TestClient:
    """Create test client backed by the in-memory store."""
    app = create_app(note_service=note_service)
    return TestClient(app)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)
