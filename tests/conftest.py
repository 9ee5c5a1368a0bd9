"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from text_refiner.clients.llm_client import LLMClient, LLMResponse
from text_refiner.controller import ControllerState, InteractionController
from text_refiner.pipeline.prompt_service import PromptService
from text_refiner.storage.kv_store import KeyValueStore


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="  Refined output.  ", input_tokens=100, output_tokens=50)
    )
    return client


@pytest.fixture
def prompt_service(mock_llm_client) -> PromptService:
    return PromptService(mock_llm_client)


@pytest.fixture
def kv_store(tmp_path) -> KeyValueStore:
    return KeyValueStore(db_path=tmp_path / "storage.db")


@pytest.fixture
def controller(prompt_service, kv_store) -> InteractionController:
    return InteractionController(ControllerState(), prompt_service, kv_store)
