"""Sibling position allocation for new branches."""

from loguru import logger

from notetree.domain.note import NewNoteOptions
from notetree.note_store.base import NoteStore


class PositionAllocator:
    """Computes where a new branch goes among its siblings."""

    def __init__(self, *, store: NoteStore) -> None:
        self.store = store

    async def get_new_note_position(self, parent_note_id: str, options: NewNoteOptions) -> int:
        """Get the position for a new child of ``parent_note_id``.

        With ``options.target == "into"`` the note is appended after the last
        non-deleted child. With ``"after"`` it is placed right after
        ``options.target_branch_id`` and the later siblings are shifted by one;
        the shift is reported as a single reordering of the parent.

        Args:
            parent_note_id: Note the new branch is placed under
            options: Placement intent

        Returns:
            The new note position

        Raises:
            ValueError: If the target is unknown or the reference branch does not exist
        """
        if options.target == "into":
            max_note_position = await self.store.get_max_note_position(parent_note_id)
            return 0 if max_note_position is None else max_note_position + 1

        if options.target == "after":
            if not options.target_branch_id:
                raise ValueError("Missing target branch for 'after' placement")

            async with self.store.transaction():
                after_position = await self.store.get_note_position(options.target_branch_id)
                if after_position is None:
                    raise ValueError(f"Branch {options.target_branch_id} not found")

                # date_modified is left alone so the shifted rows are not synced one by one
                await self.store.shift_note_positions(parent_note_id, after_position)
                await self.store.add_note_reordering_sync(parent_note_id)

            logger.debug(f"Shifted children of {parent_note_id} after position {after_position}")
            return after_position + 1

        raise ValueError(f"Unknown target: {options.target}")
