"""Pydantic model for a single refine/convert request."""

from __future__ import annotations

from pydantic import BaseModel

from text_refiner.models.task import DEFAULT_TASK, DEFAULT_TONE, Task


class RefineRequest(BaseModel):
    """Raw user text plus the selected task and tone. Never persisted."""

    text: str
    task: Task = DEFAULT_TASK
    tone: str = DEFAULT_TONE

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()
