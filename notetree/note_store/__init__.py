from notetree.note_store.base import NoteStore

__all__ = ["NoteStore"]
