"""Image reference domain models."""

from typing import ClassVar

from notetree.domain.entity import TimestampedEntity


class NoteImage(TimestampedEntity):
    """Tracked reference from a text note to an embedded image.

    Attributes:
        note_image_id: The ID of the tracking record.
        note_id: The ID of the note that references the image.
        image_id: The ID of the referenced image.
        is_deleted: Set once the note no longer references the image.
    """

    entity_name: ClassVar[str] = "note_images"
    primary_key_name: ClassVar[str] = "note_image_id"

    note_image_id: str
    note_id: str
    image_id: str
    is_deleted: bool = False
