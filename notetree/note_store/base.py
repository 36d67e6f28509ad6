from typing import AsyncContextManager, Protocol

from notetree.domain.entity import Entity
from notetree.domain.image import NoteImage
from notetree.domain.label import Label
from notetree.domain.note import Branch, Note, NoteRevision
from notetree.domain.sync import SyncEntry


class NoteStore(Protocol):
    """Protocol for note storage implementations.

    Getters return copies; changes become visible only after ``update_entity``.
    """

    def transaction(self) -> AsyncContextManager[None]:
        """Group writes so they are applied together or not at all."""
        ...

    async def get_note(self, note_id: str) -> Note | None:
        """Get a note by its ID."""
        ...

    async def get_branch(self, branch_id: str) -> Branch | None:
        """Get a branch by its ID."""
        ...

    async def update_entity(self, entity: Entity) -> None:
        """Insert or replace an entity and record a sync entry for it."""
        ...

    async def get_max_note_position(self, parent_note_id: str) -> int | None:
        """Get the highest position among non-deleted children of a parent."""
        ...

    async def get_note_position(self, branch_id: str) -> int | None:
        """Get the position of a branch."""
        ...

    async def shift_note_positions(self, parent_note_id: str, after_position: int) -> None:
        """Move non-deleted children positioned after ``after_position`` one slot down.

        Does not touch ``date_modified`` and records no sync entries.
        """
        ...

    async def add_entity_sync(self, entity_name: str, entity_id: str) -> None:
        """Record that an entity needs to be replicated."""
        ...

    async def add_note_reordering_sync(self, parent_note_id: str) -> None:
        """Record that the children of a parent were reordered."""
        ...

    async def get_recent_revision_id(self, note_id: str, cutoff: str) -> str | None:
        """Get the ID of a revision of the note taken at or after ``cutoff``."""
        ...

    async def get_revisions(self, note_id: str) -> list[NoteRevision]:
        """Get all revisions of a note."""
        ...

    async def get_note_images(self, note_id: str) -> list[NoteImage]:
        """Get the non-deleted image references of a note."""
        ...

    async def get_branches(self, note_id: str) -> list[Branch]:
        """Get the non-deleted branches placing a note."""
        ...

    async def get_child_branches(self, note_id: str) -> list[Branch]:
        """Get the non-deleted branches whose parent is the note, in position order."""
        ...

    async def get_child_notes(self, note_id: str) -> list[Note]:
        """Get the non-deleted notes placed under the note, in position order."""
        ...

    async def create_label(self, note_id: str, name: str, value: str = "") -> Label:
        """Attach a label to a note."""
        ...

    async def get_label_map(self, note_id: str) -> dict[str, str]:
        """Get the non-deleted labels of a note as a name to value mapping."""
        ...

    async def get_sync_entries(self) -> list[SyncEntry]:
        """Get all recorded sync entries, oldest first."""
        ...

    def save(self, filepath: str | None = None) -> None:
        """Save the store to disk."""
        ...
