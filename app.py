import sys
from pathlib import Path

from loguru import logger

from notetree.api import create_app
from notetree.config import settings
from notetree.note_store.local import LocalNoteStore
from notetree.options import Options
from notetree.services.notes import NoteService

logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

logger.info(f"Loading note store from {settings.local_note_store_path}")
Path(settings.local_note_store_path).parent.mkdir(parents=True, exist_ok=True)

store = LocalNoteStore(settings.local_note_store_path)
note_service = NoteService(store=store, options=Options())
app = create_app(note_service=note_service)
