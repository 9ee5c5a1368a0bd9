"""Data models for the text refiner."""

from text_refiner.models.request import RefineRequest
from text_refiner.models.result import ERROR_MARKER, ErrorKind, ProcessResult
from text_refiner.models.task import (
    DEFAULT_TASK,
    DEFAULT_TONE,
    PREDEFINED_TONES,
    Language,
    Task,
    Tone,
)

__all__ = [
    "DEFAULT_TASK",
    "DEFAULT_TONE",
    "ERROR_MARKER",
    "ErrorKind",
    "Language",
    "PREDEFINED_TONES",
    "ProcessResult",
    "RefineRequest",
    "Task",
    "Tone",
]
