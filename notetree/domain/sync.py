"""Sync log domain models."""

from pydantic import BaseModel


class SyncEntry(BaseModel):
    """Record that an entity changed and needs to be replicated."""

    entity_name: str
    entity_id: str
    sync_date: str
