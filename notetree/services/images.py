"""Tracking of images embedded in text notes."""

import re
from typing import List

from loguru import logger

from notetree import utils
from notetree.domain.image import NoteImage
from notetree.domain.note import Note
from notetree.note_store.base import NoteStore

IMAGE_REFERENCE_PATTERN = re.compile(r'src="/api/images/([a-zA-Z0-9]+)/')


class ImageReferenceTracker:
    """Keeps a note's image tracking records in line with its content."""

    def __init__(self, *, store: NoteStore) -> None:
        self.store = store

    @staticmethod
    def extract_image_ids(content: str) -> List[str]:
        """Extract the distinct image IDs referenced in HTML content, in order of appearance.

        Args:
            content: Note content containing ``<img src="/api/images/<id>/...">`` tags

        Returns:
            List of image IDs
        """
        return list(dict.fromkeys(IMAGE_REFERENCE_PATTERN.findall(content)))

    async def save_note_images(self, note: Note) -> None:
        """Create records for newly referenced images and delete records for dropped ones.

        Only text notes are tracked. Records for images still referenced are
        not written, so running this twice on the same content is a no-op.
        """
        if note.type != "text":
            return

        existing_note_images = await self.store.get_note_images(note.note_id)
        existing_image_ids = {note_image.image_id for note_image in existing_note_images}
        found_image_ids = self.extract_image_ids(note.content)

        for image_id in found_image_ids:
            if image_id not in existing_image_ids:
                await self.store.update_entity(
                    NoteImage(
                        note_image_id=utils.new_note_image_id(),
                        note_id=note.note_id,
                        image_id=image_id,
                    )
                )
                logger.debug(f"Tracking image {image_id} for note {note.note_id}")

        # images no longer present in the content
        for note_image in existing_note_images:
            if note_image.image_id not in found_image_ids:
                note_image.is_deleted = True
                await self.store.update_entity(note_image)
                logger.debug(f"Image {note_image.image_id} no longer used by note {note.note_id}")
