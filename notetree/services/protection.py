"""Propagation of the protected flag."""

from loguru import logger

from notetree.domain.note import Note
from notetree.note_store.base import NoteStore


class ProtectionPropagator:
    """Applies a note's protected flag to the note, its revisions and its subtree."""

    def __init__(self, *, store: NoteStore) -> None:
        self.store = store

    async def protect_note(self, note: Note, protect: bool) -> None:
        """Set the note's protected flag and align its revisions with it."""
        if note.is_protected != protect:
            note.is_protected = protect
            await self.store.update_entity(note)
            logger.debug(f"Note {note.note_id} protected={protect}")

        await self.protect_note_revisions(note)

    async def protect_note_revisions(self, note: Note) -> None:
        """Give every revision of the note the note's protected flag."""
        for revision in await self.store.get_revisions(note.note_id):
            if revision.is_protected != note.is_protected:
                revision.is_protected = note.is_protected
                await self.store.update_entity(revision)

    async def protect_note_recursively(
        self, note: Note, protect: bool, visited: set[str] | None = None
    ) -> None:
        """Protect or unprotect the note and every note below it.

        A note reachable through several parents is processed once.
        """
        visited = set() if visited is None else visited
        if note.note_id in visited:
            return
        visited.add(note.note_id)

        await self.protect_note(note, protect)

        for child in await self.store.get_child_notes(note.note_id):
            await self.protect_note_recursively(child, protect, visited)
