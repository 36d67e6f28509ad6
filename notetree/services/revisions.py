"""Revision snapshot policy."""

from datetime import datetime, timedelta
from typing import Callable

from loguru import logger

from notetree import utils
from notetree.domain.note import Note, NoteRevision
from notetree.note_store.base import NoteStore
from notetree.options import NOTE_REVISION_SNAPSHOT_TIME_INTERVAL, Options


class RevisionSnapshotPolicy:
    """Decides whether a note update must be preceded by a revision."""

    def __init__(
        self,
        *,
        store: NoteStore,
        options: Options,
        clock: Callable[[], datetime] = utils.now,
    ) -> None:
        """Initialize the policy.

        Args:
            store: Note store holding revisions and labels
            options: Options accessor providing the snapshot interval in seconds
            clock: Returns the current time, replaceable in tests
        """
        self.store = store
        self.options = options
        self.clock = clock

    async def should_snapshot(self, note: Note, now: datetime | None = None) -> bool:
        """Check whether the note's current state has to be kept as a revision."""
        if note.type == "file":
            return False

        label_map = await self.store.get_label_map(note.note_id)
        if label_map.get("disable_versioning") == "true":
            return False

        now = now or self.clock()
        interval = timedelta(
            seconds=await self.options.get_option_int(NOTE_REVISION_SNAPSHOT_TIME_INTERVAL)
        )

        revision_cutoff = utils.date_str(now - interval)
        if await self.store.get_recent_revision_id(note.note_id, revision_cutoff):
            return False

        if note.date_created and now - utils.parse_date_time(note.date_created) < interval:
            return False

        return True

    async def save_note_revision(self, note: Note) -> NoteRevision | None:
        """Store a revision of the note as it is now, if the policy requires one.

        The revision is created unprotected; the caller brings its flag in line
        with the note afterwards.

        Returns:
            The created revision, or None when no snapshot was needed
        """
        now = self.clock()
        if not await self.should_snapshot(note, now):
            return None

        revision = NoteRevision(
            note_revision_id=utils.new_note_revision_id(),
            note_id=note.note_id,
            title=note.title,
            content=note.content,
            is_protected=False,
            date_modified_from=note.date_modified,
            date_modified_to=utils.date_str(now),
        )
        await self.store.update_entity(revision)
        logger.debug(f"Saved revision {revision.note_revision_id} of note {note.note_id}")
        return revision
