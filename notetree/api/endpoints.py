from fastapi import APIRouter, HTTPException
from loguru import logger
from pydantic import BaseModel

from notetree.domain.note import Branch, NewNoteOptions, Note, NoteUpdate
from notetree.services.notes import NoteService


class CreatedNote(BaseModel):
    note: Note
    branch: Branch


def _create_new_note_endpoint(note_service: NoteService):
    """Create the note creation endpoint handler."""

    async def create_child_note(parent_note_id: str, options: NewNoteOptions) -> CreatedNote:
        try:
            note, branch = await note_service.create_new_note(parent_note_id, options)
        except ValueError as e:
            logger.error(f"Error creating note under {parent_note_id}: {e}")
            raise HTTPException(status_code=400, detail=str(e)) from e
        return CreatedNote(note=note, branch=branch)

    return create_child_note


def _get_note_endpoint(note_service: NoteService):
    """Create the note lookup endpoint handler."""

    async def get_note(note_id: str) -> Note:
        note = await note_service.get_note(note_id)
        if not note:
            raise HTTPException(status_code=404, detail="Note not found")
        return note

    return get_note


def _update_note_endpoint(note_service: NoteService):
    """Create the note update endpoint handler."""

    async def update_note(note_id: str, updates: NoteUpdate) -> Note:
        try:
            return await note_service.update_note(note_id, updates)
        except KeyError as err:
            logger.error(f"Cannot update missing note {note_id}")
            raise HTTPException(status_code=404, detail="Note not found") from err

    return update_note


def _delete_branch_endpoint(note_service: NoteService):
    """Create the branch deletion endpoint handler."""

    async def delete_branch(branch_id: str) -> dict:
        branch = await note_service.get_branch(branch_id)
        if not branch:
            raise HTTPException(status_code=404, detail="Branch not found")
        await note_service.delete_note(branch)
        return {"branch_id": branch_id, "deleted": True}

    return delete_branch


def _protect_subtree_endpoint(note_service: NoteService):
    """Create the subtree protection endpoint handler."""

    async def protect_subtree(note_id: str, is_protected: bool) -> dict:
        note = await note_service.get_note(note_id)
        if not note:
            raise HTTPException(status_code=404, detail="Note not found")
        await note_service.protect_note_recursively(note, is_protected)
        return {"note_id": note_id, "is_protected": is_protected}

    return protect_subtree


def get_endpoints_router(*, note_service: NoteService) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        return {"status": "healthy"}

    router.post("/api/notes/{parent_note_id}/children")(_create_new_note_endpoint(note_service))
    router.get("/api/notes/{note_id}")(_get_note_endpoint(note_service))
    router.put("/api/notes/{note_id}")(_update_note_endpoint(note_service))
    router.delete("/api/branches/{branch_id}")(_delete_branch_endpoint(note_service))
    router.put("/api/notes/{note_id}/protect/{is_protected}")(
        _protect_subtree_endpoint(note_service)
    )

    return router
