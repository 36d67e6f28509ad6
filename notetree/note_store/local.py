import asyncio
import copy
import json
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Dict, List

from loguru import logger

from notetree import utils
from notetree.domain.entity import Entity
from notetree.domain.image import NoteImage
from notetree.domain.label import Label
from notetree.domain.note import ROOT_NOTE_ID, Branch, Note, NoteRevision
from notetree.domain.sync import SyncEntry
from notetree.note_store.base import NoteStore

ENTITY_TYPES: Dict[str, type[Entity]] = {
    entity_type.entity_name: entity_type
    for entity_type in (Note, Branch, NoteRevision, NoteImage, Label)
}


class LocalNoteStore(NoteStore):
    """Local note store that keeps all tables in memory and saves them to a JSON file."""

    def __init__(self, filepath: str | Path | None = None) -> None:
        """Initialize LocalNoteStore.

        Args:
            filepath: Path to note store file. If provided and exists, will auto-load.
                     If provided, every committed transaction is saved to this path.
                     If not provided, creates a store in memory only.
        """
        self._filepath = str(filepath) if filepath else None
        self._lock = asyncio.Lock()
        self._transaction_owner: asyncio.Task | None = None

        if self._filepath and Path(self._filepath).exists():
            with open(self._filepath, "r") as f:
                data = json.load(f)
            self._tables: Dict[str, Dict[str, Entity]] = {
                name: {
                    entity_id: entity_type(**entity_data)
                    for entity_id, entity_data in data.get(name, {}).items()
                }
                for name, entity_type in ENTITY_TYPES.items()
            }
            self._sync_entries: List[SyncEntry] = [
                SyncEntry(**entry) for entry in data.get("sync", [])
            ]
        else:
            self._tables = {name: {} for name in ENTITY_TYPES}
            self._sync_entries = []
            self._seed_root()

    @classmethod
    def from_data(
        cls,
        notes: List[Note] | None = None,
        branches: List[Branch] | None = None,
        revisions: List[NoteRevision] | None = None,
        note_images: List[NoteImage] | None = None,
        labels: List[Label] | None = None,
    ) -> "LocalNoteStore":
        """Create LocalNoteStore from provided entities (useful for testing).

        The root note is seeded unless ``notes`` already contains it.
        """
        instance = cls(filepath=None)
        for entity in [
            *(notes or []),
            *(branches or []),
            *(revisions or []),
            *(note_images or []),
            *(labels or []),
        ]:
            instance._tables[entity.entity_name][entity.entity_id] = entity
        return instance

    def _seed_root(self) -> None:
        root = Note(note_id=ROOT_NOTE_ID, title="root")
        root.before_saving()
        root_branch = Branch(
            branch_id=ROOT_NOTE_ID,
            note_id=ROOT_NOTE_ID,
            parent_note_id="none",
            note_position=0,
            is_expanded=True,
        )
        root_branch.before_saving()
        self._tables[Note.entity_name][root.note_id] = root
        self._tables[Branch.entity_name][root_branch.branch_id] = root_branch

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Run the enclosed writes as one unit.

        Transactions are serialized by a single lock. A nested transaction in
        the task that already holds the lock joins the outer one. If the
        outermost block raises, every table is restored to its state at entry.
        """
        task = asyncio.current_task()
        if self._transaction_owner is not None and self._transaction_owner is task:
            yield
            return

        async with self._lock:
            self._transaction_owner = task
            snapshot = copy.deepcopy((self._tables, self._sync_entries))
            try:
                yield
            except BaseException:
                self._tables, self._sync_entries = snapshot
                logger.warning("Transaction rolled back")
                raise
            finally:
                self._transaction_owner = None

            if self._filepath:
                self.save()

    async def get_note(self, note_id: str) -> Note | None:
        """Get a note by its ID."""
        note = self._tables[Note.entity_name].get(note_id)
        return note.model_copy() if note else None

    async def get_branch(self, branch_id: str) -> Branch | None:
        """Get a branch by its ID."""
        branch = self._tables[Branch.entity_name].get(branch_id)
        return branch.model_copy() if branch else None

    async def update_entity(self, entity: Entity) -> None:
        """Insert or replace an entity and record a sync entry for it."""
        entity.before_saving()
        self._tables[entity.entity_name][entity.entity_id] = entity.model_copy()
        await self.add_entity_sync(entity.entity_name, entity.entity_id)

    def _active_children(self, parent_note_id: str) -> List[Branch]:
        return [
            branch
            for branch in self._tables[Branch.entity_name].values()
            if branch.parent_note_id == parent_note_id and not branch.is_deleted
        ]

    async def get_max_note_position(self, parent_note_id: str) -> int | None:
        """Get the highest position among non-deleted children of a parent."""
        positions = [branch.note_position for branch in self._active_children(parent_note_id)]
        return max(positions) if positions else None

    async def get_note_position(self, branch_id: str) -> int | None:
        """Get the position of a branch."""
        branch = self._tables[Branch.entity_name].get(branch_id)
        return branch.note_position if branch else None

    async def shift_note_positions(self, parent_note_id: str, after_position: int) -> None:
        """Move non-deleted children positioned after ``after_position`` one slot down."""
        for branch in self._active_children(parent_note_id):
            if branch.note_position > after_position:
                branch.note_position += 1

    async def add_entity_sync(self, entity_name: str, entity_id: str) -> None:
        """Record that an entity needs to be replicated."""
        self._sync_entries.append(
            SyncEntry(entity_name=entity_name, entity_id=entity_id, sync_date=utils.now_date())
        )

    async def add_note_reordering_sync(self, parent_note_id: str) -> None:
        """Record that the children of a parent were reordered."""
        await self.add_entity_sync("note_reordering", parent_note_id)

    async def get_recent_revision_id(self, note_id: str, cutoff: str) -> str | None:
        """Get the ID of a revision of the note taken at or after ``cutoff``."""
        for revision in self._tables[NoteRevision.entity_name].values():
            if revision.note_id == note_id and revision.date_modified_to >= cutoff:
                return revision.note_revision_id
        return None

    async def get_revisions(self, note_id: str) -> List[NoteRevision]:
        """Get all revisions of a note."""
        return [
            revision.model_copy()
            for revision in self._tables[NoteRevision.entity_name].values()
            if revision.note_id == note_id
        ]

    async def get_note_images(self, note_id: str) -> List[NoteImage]:
        """Get the non-deleted image references of a note."""
        return [
            note_image.model_copy()
            for note_image in self._tables[NoteImage.entity_name].values()
            if note_image.note_id == note_id and not note_image.is_deleted
        ]

    async def get_branches(self, note_id: str) -> List[Branch]:
        """Get the non-deleted branches placing a note."""
        return [
            branch.model_copy()
            for branch in self._tables[Branch.entity_name].values()
            if branch.note_id == note_id and not branch.is_deleted
        ]

    async def get_child_branches(self, note_id: str) -> List[Branch]:
        """Get the non-deleted branches whose parent is the note, in position order."""
        children = sorted(self._active_children(note_id), key=lambda b: b.note_position)
        return [branch.model_copy() for branch in children]

    async def get_child_notes(self, note_id: str) -> List[Note]:
        """Get the non-deleted notes placed under the note, in position order."""
        notes = self._tables[Note.entity_name]
        child_notes = []
        for branch in sorted(self._active_children(note_id), key=lambda b: b.note_position):
            note = notes.get(branch.note_id)
            if note and not note.is_deleted:
                child_notes.append(note.model_copy())
        return child_notes

    async def create_label(self, note_id: str, name: str, value: str = "") -> Label:
        """Attach a label to a note, after any labels it already has."""
        positions = [
            label.position
            for label in self._tables[Label.entity_name].values()
            if label.note_id == note_id and not label.is_deleted
        ]
        label = Label(
            label_id=utils.new_label_id(),
            note_id=note_id,
            name=name,
            value=value,
            position=max(positions) + 1 if positions else 0,
        )
        await self.update_entity(label)
        return label

    async def get_label_map(self, note_id: str) -> Dict[str, str]:
        """Get the non-deleted labels of a note as a name to value mapping."""
        labels = sorted(
            (
                label
                for label in self._tables[Label.entity_name].values()
                if label.note_id == note_id and not label.is_deleted
            ),
            key=lambda label: label.position,
        )
        return {label.name: label.value for label in labels}

    async def get_sync_entries(self) -> List[SyncEntry]:
        """Get all recorded sync entries, oldest first."""
        return list(self._sync_entries)

    def save(self, filepath: str | None = None) -> None:
        """Save the note store to a JSON file.

        Args:
            filepath: Path to save to. If not provided, uses the filepath from initialization.
        """
        save_path = filepath or self._filepath
        if not save_path:
            raise ValueError(
                "No filepath provided and no default filepath set during initialization"
            )

        save_path = str(save_path)
        data = {
            name: {entity_id: entity.model_dump() for entity_id, entity in table.items()}
            for name, table in self._tables.items()
        }
        data["sync"] = [entry.model_dump() for entry in self._sync_entries]
        with open(save_path, "w") as f:
            json.dump(data, f)
