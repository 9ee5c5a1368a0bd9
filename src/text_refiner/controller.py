"""UI state and the actions that mutate it.

The Streamlit page keeps one ``ControllerState`` per browser session and
builds an ``InteractionController`` around it on every rerun.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Protocol

from text_refiner.clipboard import copy_button_html
from text_refiner.models.request import RefineRequest
from text_refiner.models.result import ProcessResult
from text_refiner.models.task import DEFAULT_TASK, DEFAULT_TONE, PREDEFINED_TONES, Task
from text_refiner.pipeline.prompt_service import PromptService
from text_refiner.storage.kv_store import StorageError

logger = logging.getLogger(__name__)

CUSTOM_TONES_STORAGE_KEY = "ai-text-refiner-custom-tones"
COPY_FEEDBACK_SECONDS = 2.0

EMPTY_INPUT_ERROR = "Please enter some text to process."
EMPTY_TONE_ERROR = "Custom tone cannot be empty."
DUPLICATE_TONE_ERROR = "This tone already exists."
LOAD_TONES_ERROR = "Could not load custom tones."
SAVE_TONES_ERROR = "Could not save custom tones."
UNEXPECTED_ERROR = "Error: An unexpected error occurred. Please try again."


class TextStore(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


@dataclass
class ControllerState:
    input_text: str = ""
    selected_task: Task = DEFAULT_TASK
    selected_tone: str = DEFAULT_TONE
    output_text: str = ""
    is_loading: bool = False
    api_error: str | None = None
    form_error: str | None = None
    custom_tones: list[str] = field(default_factory=list)
    custom_tone_input: str = ""
    last_result: ProcessResult | None = None


class InteractionController:
    """Validate user actions, call the prompt service, persist custom tones."""

    def __init__(
        self,
        state: ControllerState,
        service: PromptService,
        store: TextStore,
        *,
        storage_key: str = CUSTOM_TONES_STORAGE_KEY,
        copy_feedback_seconds: float = COPY_FEEDBACK_SECONDS,
    ):
        self.state = state
        self.service = service
        self.store = store
        self.storage_key = storage_key
        self.copy_feedback_seconds = copy_feedback_seconds

    # -- tones ---------------------------------------------------------------

    @property
    def all_tones(self) -> list[str]:
        return [*PREDEFINED_TONES, *self.state.custom_tones]

    def is_custom(self, tone: str) -> bool:
        return tone not in PREDEFINED_TONES

    def load_custom_tones(self) -> None:
        """Read the custom-tone list from the store. Called once per session."""
        try:
            raw = self.store.get_item(self.storage_key)
            if not raw:
                return
            tones = json.loads(raw)
            if not isinstance(tones, list) or not all(isinstance(t, str) for t in tones):
                raise ValueError(f"expected a list of strings, got {type(tones).__name__}")
        except (StorageError, ValueError):
            logger.exception("Failed to parse custom tones from storage")
            self.state.form_error = LOAD_TONES_ERROR
            return
        self.state.custom_tones = tones

    def _set_custom_tones(self, tones: list[str]) -> None:
        self.state.custom_tones = tones
        try:
            self.store.set_item(self.storage_key, json.dumps(tones, ensure_ascii=False))
        except StorageError:
            logger.exception("Failed to save custom tones to storage")
            self.state.form_error = SAVE_TONES_ERROR

    def set_custom_tone_input(self, value: str) -> None:
        self.state.custom_tone_input = value
        self.state.form_error = None

    def add_custom_tone(self) -> bool:
        """Add the pending input as a custom tone. Returns True when added."""
        new_tone = self.state.custom_tone_input.strip()
        if not new_tone:
            self.state.form_error = EMPTY_TONE_ERROR
            return False
        if any(t.lower() == new_tone.lower() for t in self.all_tones):
            self.state.form_error = DUPLICATE_TONE_ERROR
            return False
        self.state.custom_tone_input = ""
        self.state.form_error = None
        self._set_custom_tones([*self.state.custom_tones, new_tone])
        return True

    def remove_custom_tone(self, tone: str) -> None:
        self._set_custom_tones([t for t in self.state.custom_tones if t != tone])
        if self.state.selected_tone == tone:
            self.state.selected_tone = DEFAULT_TONE

    def select_tone(self, tone: str) -> None:
        self.state.selected_tone = tone

    # -- task / input --------------------------------------------------------

    def select_task(self, task: Task) -> None:
        self.state.selected_task = Task(task)

    def set_input_text(self, text: str) -> None:
        self.state.input_text = text

    async def process(self) -> ProcessResult | None:
        """Run the selected task on the input text.

        Returns None when validation fails before any call is made, or when
        the service fails unexpectedly (the message lands in ``api_error``).
        """
        state = self.state
        if not state.input_text.strip():
            state.form_error = EMPTY_INPUT_ERROR
            state.output_text = ""
            return None

        state.is_loading = True
        state.api_error = None
        state.output_text = ""
        if state.form_error == EMPTY_INPUT_ERROR:
            state.form_error = None

        request = RefineRequest(
            text=state.input_text,
            task=state.selected_task,
            tone=state.selected_tone,
        )
        try:
            result = await self.service.process(request)
        except Exception:
            logger.exception("Processing failed (task=%s)", state.selected_task.value)
            state.api_error = UNEXPECTED_ERROR
            return None
        finally:
            state.is_loading = False

        if result.ok:
            state.output_text = result.text
        else:
            state.api_error = result.error_message
        state.last_result = result
        return result

    # -- output --------------------------------------------------------------

    def copy_control(self) -> str | None:
        """HTML copy button for the current output, or None when there is nothing to copy.

        The confirmation label clears itself after ``copy_feedback_seconds``.
        """
        if not self.state.output_text or self.state.is_loading:
            return None
        return copy_button_html(
            self.state.output_text,
            feedback_seconds=self.copy_feedback_seconds,
        )
