"""Usage logging data models."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from text_refiner.logging.cost_calculator import calculate_cost
from text_refiner.models.result import ProcessResult


class UsageLog(BaseModel):
    """Single usage log entry for one processing run."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    session_id: str = "anonymous"
    timestamp: datetime = Field(default_factory=datetime.now)
    task: str  # Task value, e.g. "Refine English"
    tone: str
    model: str | None = None
    success: bool = True
    error_kind: str | None = None
    error_message: str | None = None
    elapsed_seconds: float = 0.0
    input_chars: int = 0
    output_chars: int = 0
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    estimated_cost_usd: float = 0.0

    @classmethod
    def from_result(
        cls,
        result: ProcessResult,
        *,
        task: str,
        tone: str,
        input_text: str,
        elapsed_seconds: float,
        session_id: str = "anonymous",
    ) -> UsageLog:
        return cls(
            session_id=session_id,
            task=task,
            tone=tone,
            model=result.model,
            success=result.ok,
            error_kind=result.error_kind.value if result.error_kind else None,
            error_message=result.error_message,
            elapsed_seconds=elapsed_seconds,
            input_chars=len(input_text),
            output_chars=len(result.text),
            total_input_tokens=result.input_tokens,
            total_output_tokens=result.output_tokens,
            estimated_cost_usd=calculate_cost(
                [(result.model, result.input_tokens, result.output_tokens)]
            ),
        )
