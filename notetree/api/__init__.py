from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notetree.api.endpoints import get_endpoints_router
from notetree.services.notes import NoteService


def create_app(*, note_service: NoteService) -> FastAPI:
    """Create FastAPI app."""
    app = FastAPI()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router=get_endpoints_router(note_service=note_service))

    return app
