"""Soft deletion of branches and the notes they leave unreachable."""

from loguru import logger

from notetree.domain.note import Branch
from notetree.note_store.base import NoteStore


class DeletionCascade:
    """Deletes a branch, and its note once no other branch places it."""

    def __init__(self, *, store: NoteStore) -> None:
        self.store = store

    async def delete_note(self, branch: Branch | None, visited: set[str] | None = None) -> None:
        """Soft-delete a branch and cascade to its note and subtree if needed.

        The note is only deleted when this was its last non-deleted branch; its
        child branches are then deleted the same way. Missing or already deleted
        branches are ignored.

        Args:
            branch: The branch to delete
            visited: Branch IDs already handled in this cascade
        """
        if not branch or branch.is_deleted:
            return

        visited = set() if visited is None else visited
        if branch.branch_id in visited:
            return
        visited.add(branch.branch_id)

        branch.is_deleted = True
        await self.store.update_entity(branch)

        note = await self.store.get_note(branch.note_id)
        if not note:
            logger.warning(f"Branch {branch.branch_id} points to missing note {branch.note_id}")
            return

        if await self.store.get_branches(note.note_id):
            return

        note.is_deleted = True
        await self.store.update_entity(note)
        logger.info(f"Deleted note {note.note_id}")

        for child_branch in await self.store.get_child_branches(note.note_id):
            await self.delete_note(child_branch, visited)
