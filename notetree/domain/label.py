"""Label domain models."""

from typing import ClassVar

from notetree.domain.entity import TimestampedEntity


class Label(TimestampedEntity):
    """Name/value pair attached to a note."""

    entity_name: ClassVar[str] = "labels"
    primary_key_name: ClassVar[str] = "label_id"

    label_id: str
    note_id: str
    name: str
    value: str = ""
    position: int = 0
    is_deleted: bool = False
