"""Pydantic model for the outcome of a processing call."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

ERROR_MARKER = "Error:"


class ErrorKind(str, Enum):
    NETWORK = "network"
    AUTH = "auth"
    QUOTA = "quota"
    MALFORMED_RESPONSE = "malformed_response"
    UNKNOWN = "unknown"


class ProcessResult(BaseModel):
    """Generated text on success, or an error kind plus display message."""

    text: str = ""
    error_kind: ErrorKind | None = None
    error_message: str | None = None  # always starts with ERROR_MARKER
    model: str | None = None
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, text: str, **usage) -> ProcessResult:
        return cls(text=text, **usage)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, model: str | None = None) -> ProcessResult:
        if not message.startswith(ERROR_MARKER):
            message = f"{ERROR_MARKER} {message}"
        return cls(error_kind=kind, error_message=message, model=model)
