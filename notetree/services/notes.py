"""Note lifecycle service: creation, update, deletion and protection."""

import json
from typing import Any, Dict

from loguru import logger

from notetree import utils
from notetree.domain.note import ROOT_NOTE_ID, Branch, NewNoteOptions, Note, NoteUpdate
from notetree.note_store.base import NoteStore
from notetree.options import Options

from .deletion import DeletionCascade
from .images import ImageReferenceTracker
from .positions import PositionAllocator
from .protection import ProtectionPropagator
from .revisions import RevisionSnapshotPolicy


class NoteService:
    """Orchestrates the note and branch lifecycle on top of a note store."""

    def __init__(
        self,
        *,
        store: NoteStore,
        options: Options,
        revision_policy: RevisionSnapshotPolicy | None = None,
    ):
        """Initialize the service with required collaborators.

        Args:
            store: Note store for notes, branches, revisions and images
            options: Options accessor for the default revision policy
            revision_policy: Revision policy to use instead of the default one
        """
        self.store = store

        self.position_allocator = PositionAllocator(store=store)
        self.revision_policy = revision_policy or RevisionSnapshotPolicy(
            store=store, options=options
        )
        self.image_tracker = ImageReferenceTracker(store=store)
        self.protection = ProtectionPropagator(store=store)
        self.deletion = DeletionCascade(store=store)

    async def get_note(self, note_id: str) -> Note | None:
        return await self.store.get_note(note_id)

    async def get_branch(self, branch_id: str) -> Branch | None:
        return await self.store.get_branch(branch_id)

    async def create_new_note(
        self, parent_note_id: str, options: NewNoteOptions
    ) -> tuple[Note, Branch]:
        """Create a note and its branch under ``parent_note_id``.

        Position allocation, the note and the branch are written in one
        transaction. Unless the parent is the root, a missing type or MIME
        type is taken from the parent note.

        Returns:
            The created note and branch

        Raises:
            ValueError: If the parent note or the placement target is invalid
        """
        async with self.store.transaction():
            note_type, mime = options.type, options.mime

            if parent_note_id != ROOT_NOTE_ID:
                parent = await self.store.get_note(parent_note_id)
                if not parent:
                    raise ValueError(f"Parent note {parent_note_id} not found")
                note_type = note_type or parent.type
                mime = mime or parent.mime

            note_position = await self.position_allocator.get_new_note_position(
                parent_note_id, options
            )

            note = Note(
                note_id=utils.new_note_id(),
                title=options.title,
                content=options.content or "",
                is_protected=options.is_protected,
                type=note_type or "text",
                mime=mime or "text/html",
            )
            await self.store.update_entity(note)

            branch = Branch(
                branch_id=utils.new_branch_id(),
                note_id=note.note_id,
                parent_note_id=parent_note_id,
                note_position=note_position,
                is_expanded=False,
                is_deleted=False,
            )
            await self.store.update_entity(branch)

        logger.info(f"Created note {note.note_id} under {parent_note_id} at {note_position}")
        return note, branch

    async def create_note(
        self,
        parent_note_id: str,
        title: str,
        content: Any = "",
        *,
        json: bool = False,
        is_protected: bool = False,
        type: str | None = None,
        mime: str | None = None,
        labels: Dict[str, str] | None = None,
    ) -> str:
        """Create a note as the last child of a parent.

        Args:
            parent_note_id: ID of the parent note
            title: Note title
            content: Note content; any JSON-serializable value when ``json`` is set
            json: Store ``content`` as tab-indented JSON, as a code note by default
            is_protected: Initial protection flag
            type: Note type
            mime: MIME type
            labels: Labels to attach, as a name to value mapping

        Returns:
            ID of the created note

        Raises:
            ValueError: If the parent note ID or the title is empty
        """
        if not parent_note_id:
            raise ValueError("Empty parent_note_id")
        if not title:
            raise ValueError("Empty title")

        options = NewNoteOptions(
            title=title,
            content=_dump_json(content) if json else content,
            target="into",
            is_protected=is_protected,
            type=type,
            mime=mime,
        )

        if json and not options.type:
            options.type = "code"
            options.mime = "application/json"

        if not options.type:
            options.type = "text"
            options.mime = "text/html"

        async with self.store.transaction():
            note, _ = await self.create_new_note(parent_note_id, options)

            for name, value in (labels or {}).items():
                await self.store.create_label(note.note_id, name, value)

        return note.note_id

    async def update_note(self, note_id: str, updates: NoteUpdate) -> Note:
        """Apply a partial update to a note.

        A revision of the pre-update state is stored first when the revision
        policy asks for one. File notes keep their content. Image references
        are reconciled and revisions take over the note's protected flag.

        Returns:
            The updated note

        Raises:
            KeyError: If the note does not exist
        """
        async with self.store.transaction():
            note = await self.store.get_note(note_id)
            if not note:
                raise KeyError(f"Note {note_id} not found")

            await self.revision_policy.save_note_revision(note)

            if updates.title is not None:
                note.title = updates.title
            # file payloads are not changed through updates
            if updates.content is not None and note.type != "file":
                note.content = updates.content
            if updates.is_protected is not None:
                note.is_protected = updates.is_protected

            await self.store.update_entity(note)
            await self.image_tracker.save_note_images(note)
            await self.protection.protect_note_revisions(note)

        logger.debug(f"Updated note {note_id}")
        return note

    async def delete_note(self, branch: Branch | None) -> None:
        """Delete a branch, cascading to its note when it was the last placement."""
        if not branch:
            return

        async with self.store.transaction():
            # the caller may hold a stale copy of the branch
            current = await self.store.get_branch(branch.branch_id)
            await self.deletion.delete_note(current)

    async def protect_note_recursively(self, note: Note, protect: bool) -> None:
        """Set the protected flag on the note, its subtree and all their revisions."""
        async with self.store.transaction():
            await self.protection.protect_note_recursively(note, protect)
        logger.info(f"Set protected={protect} on subtree of {note.note_id}")


def _dump_json(content: Any) -> str:
    return json.dumps(content, indent="\t")
