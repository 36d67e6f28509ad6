"""Base class for persisted entities."""

from typing import ClassVar

from pydantic import BaseModel

from notetree import utils


class Entity(BaseModel):
    """A row in one of the store's tables.

    Subclasses name their table and primary key field so the store can
    persist any entity through a single ``update_entity`` call.
    """

    entity_name: ClassVar[str]
    primary_key_name: ClassVar[str]

    @property
    def entity_id(self) -> str:
        return getattr(self, self.primary_key_name)

    def before_saving(self) -> None:
        """Hook called by the store right before the entity is written."""


class TimestampedEntity(Entity):
    """Entity that tracks its creation and last modification time."""

    date_created: str | None = None
    date_modified: str | None = None

    def before_saving(self) -> None:
        now = utils.now_date()
        if not self.date_created:
            self.date_created = now
        self.date_modified = now
