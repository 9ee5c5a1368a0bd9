"""Tests for request/result models and the task/tone enums."""

import pytest
from pydantic import ValidationError

from text_refiner.models import (
    DEFAULT_TASK,
    DEFAULT_TONE,
    ERROR_MARKER,
    PREDEFINED_TONES,
    ErrorKind,
    Language,
    ProcessResult,
    RefineRequest,
    Task,
)


class TestTask:
    def test_four_tasks(self):
        assert len(Task) == 4

    def test_refine_tasks_map_to_languages(self):
        assert Task.REFINE_ENGLISH.language is Language.ENGLISH
        assert Task.REFINE_BANGLISH.language is Language.BANGLISH
        assert Task.REFINE_BANGLA.language is Language.BANGLA

    def test_conversion_has_no_language(self):
        assert Task.BANGLISH_TO_ENGLISH.language is None

    def test_language_labels(self):
        assert Language.BANGLISH.value == "Banglish (Bengali in English letters)"
        assert Language.BANGLA.value == "Bengali (Bangla script)"


class TestDefaults:
    def test_defaults(self):
        assert DEFAULT_TASK is Task.REFINE_ENGLISH
        assert DEFAULT_TONE == "Professional"
        assert PREDEFINED_TONES == ["Professional", "Casual", "Crazy", "Cool"]


class TestRefineRequest:
    def test_defaults(self):
        request = RefineRequest(text="hi")
        assert request.task is Task.REFINE_ENGLISH
        assert request.tone == "Professional"

    def test_task_from_value(self):
        request = RefineRequest(text="hi", task="Banglish to English")
        assert request.task is Task.BANGLISH_TO_ENGLISH

    def test_rejects_unknown_task(self):
        with pytest.raises(ValidationError):
            RefineRequest(text="hi", task="Translate Klingon")

    @pytest.mark.parametrize("text,blank", [("", True), ("  \n", True), (" a ", False)])
    def test_is_blank(self, text, blank):
        assert RefineRequest(text=text).is_blank is blank


class TestProcessResult:
    def test_success(self):
        result = ProcessResult.success("done", model="m", input_tokens=3, output_tokens=4)
        assert result.ok
        assert result.text == "done"
        assert result.error_message is None

    def test_failure_adds_marker(self):
        result = ProcessResult.failure(ErrorKind.NETWORK, "Failed to refine text. offline")
        assert not result.ok
        assert result.error_message == "Error: Failed to refine text. offline"

    def test_failure_keeps_existing_marker(self):
        result = ProcessResult.failure(ErrorKind.AUTH, f"{ERROR_MARKER} bad key")
        assert result.error_message == "Error: bad key"
        assert result.error_kind is ErrorKind.AUTH
