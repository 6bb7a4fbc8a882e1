"""Controller layer keeping atlas session state out of the widgets."""

from .session import (
    AtlasSession,
    ExternalOpenError,
    GenerationResult,
    NoImagesSelectedError,
    SavedFileMissingError,
)

__all__ = [
    "AtlasSession",
    "ExternalOpenError",
    "GenerationResult",
    "NoImagesSelectedError",
    "SavedFileMissingError",
]
