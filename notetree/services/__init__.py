from .deletion import DeletionCascade
from .images import ImageReferenceTracker
from .notes import NoteService
from .positions import PositionAllocator
from .protection import ProtectionPropagator
from .revisions import RevisionSnapshotPolicy

__all__ = [
    "DeletionCascade",
    "ImageReferenceTracker",
    "NoteService",
    "PositionAllocator",
    "ProtectionPropagator",
    "RevisionSnapshotPolicy",
]
