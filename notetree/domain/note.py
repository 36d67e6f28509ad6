"""Note domain models."""

from typing import ClassVar

from pydantic import BaseModel

from notetree.domain.entity import Entity, TimestampedEntity

ROOT_NOTE_ID = "root"


class Note(TimestampedEntity):
    """A content item, independent of where it is placed in the tree.

    Attributes:
        note_id: Unique, immutable identifier
        title: Note title
        content: Note body, HTML for text notes
        type: Content discriminator such as "text", "code" or "file"
        mime: MIME type of the content
        is_protected: Whether the note is encrypted
        is_deleted: Soft-delete flag
        date_created: Creation timestamp
        date_modified: Last modification timestamp
    """

    entity_name: ClassVar[str] = "notes"
    primary_key_name: ClassVar[str] = "note_id"

    note_id: str
    title: str = ""
    content: str = ""
    type: str = "text"
    mime: str = "text/html"
    is_protected: bool = False
    is_deleted: bool = False


class Branch(TimestampedEntity):
    """Placement of a note under a parent note.

    A note may have several branches, so the placements form a DAG.
    """

    entity_name: ClassVar[str] = "branches"
    primary_key_name: ClassVar[str] = "branch_id"

    branch_id: str
    note_id: str
    parent_note_id: str
    note_position: int
    is_expanded: bool = False
    is_deleted: bool = False


class NoteRevision(Entity):
    """Historical snapshot of a note's title and content."""

    entity_name: ClassVar[str] = "note_revisions"
    primary_key_name: ClassVar[str] = "note_revision_id"

    note_revision_id: str
    note_id: str
    title: str
    content: str
    is_protected: bool = False
    date_modified_from: str | None = None
    date_modified_to: str


class NewNoteOptions(BaseModel):
    """Options for creating a note under a parent.

    Attributes:
        title: Note title
        content: Initial content, empty when not given
        target: "into" to append as the last child, "after" to insert right
            after ``target_branch_id``
        target_branch_id: Sibling branch to insert after
        is_protected: Initial protection flag
        type: Note type, inherited from the parent when not given
        mime: MIME type, inherited from the parent when not given
    """

    title: str = ""
    content: str | None = None
    target: str = "into"
    target_branch_id: str | None = None
    is_protected: bool = False
    type: str | None = None
    mime: str | None = None


class NoteUpdate(BaseModel):
    """Partial update of a note. Fields left as None are not changed."""

    title: str | None = None
    content: str | None = None
    is_protected: bool | None = None
