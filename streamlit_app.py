"""Streamlit Web UI for text-refiner.

Pick a task (refine in English / Banglish / Bangla, or Banglish → English),
pick or add a tone, and let Claude rewrite the text.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
import uuid

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so the LLM client can read them
for key in ("ANTHROPIC_API_KEY",):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from text_refiner.clients.llm_client import LLMClient
from text_refiner.config import MissingCredentialError, load_config, require_api_key
from text_refiner.controller import ControllerState, InteractionController
from text_refiner.logging.models import UsageLog
from text_refiner.logging.usage_store import UsageStore
from text_refiner.models.task import Task
from text_refiner.pipeline.prompt_service import PromptService
from text_refiner.storage.kv_store import KeyValueStore

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="AI Text Refiner",
    page_icon=":sparkles:",
    layout="wide",
)


@st.cache_resource
def _get_config():
    config = load_config()
    logging.basicConfig(
        level=config.logging.level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return config


@st.cache_resource
def _get_api_key() -> str:
    return require_api_key()


@st.cache_resource
def _get_store(db_path: str) -> KeyValueStore:
    return KeyValueStore(db_path)


@st.cache_resource
def _get_usage_store(db_path: str) -> UsageStore:
    return UsageStore(db_path)


config = _get_config()

try:
    API_KEY = _get_api_key()
except MissingCredentialError as e:
    logger.error("Startup aborted: %s", e)
    st.error(str(e))
    st.stop()

store = _get_store(str(config.storage.resolved_db_path))

# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

if "session_id" not in st.session_state:
    st.session_state.session_id = f"sess-{uuid.uuid4().hex[:12]}"


def _build_controller(state: ControllerState) -> InteractionController:
    # The async HTTP client is bound to the event loop asyncio.run creates,
    # so the client is rebuilt per rerun from the startup credential.
    llm = LLMClient(
        api_key=API_KEY,
        timeout=config.llm.timeout,
        max_attempts=config.llm.max_attempts,
    )
    service = PromptService(
        llm,
        model=config.llm.model,
        temperature=config.llm.temperature,
        top_p=config.llm.top_p,
        max_tokens=config.llm.max_tokens,
    )
    return InteractionController(
        state,
        service,
        store,
        storage_key=config.storage.custom_tones_key,
        copy_feedback_seconds=config.ui.copy_feedback_seconds,
    )


if "refiner_state" not in st.session_state:
    st.session_state.refiner_state = ControllerState()
    _build_controller(st.session_state.refiner_state).load_custom_tones()

state: ControllerState = st.session_state.refiner_state
controller = _build_controller(state)


def _record_usage(result, elapsed: float) -> None:
    if not config.usage.enabled:
        return
    try:
        usage_store = _get_usage_store(str(config.usage.resolved_db_path))
        usage_store.save_log(
            UsageLog.from_result(
                result,
                task=state.selected_task.value,
                tone=state.selected_tone,
                input_text=state.input_text,
                elapsed_seconds=elapsed,
                session_id=st.session_state.session_id,
            )
        )
    except Exception:
        logger.exception("Failed to save usage log")


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

with st.sidebar:
    st.title("AI Text Refiner")
    st.caption("Instantly rewrite and translate your text into different styles.")
    st.divider()
    st.caption(f"Model: {config.llm.model}")
    if config.usage.enabled:
        try:
            stats = _get_usage_store(str(config.usage.resolved_db_path)).get_monthly_stats()
            st.caption(
                f"{stats['month']}: {stats['total_runs']} runs · "
                f"${stats['total_cost_usd']:.4f}"
            )
        except Exception:
            logger.exception("Failed to read usage stats")

# ---------------------------------------------------------------------------
# Input & controls
# ---------------------------------------------------------------------------

st.header("AI Text Refiner")
col_in, col_out = st.columns(2)

with col_in:
    tasks = list(Task)
    task = st.radio(
        "Select Task",
        tasks,
        index=tasks.index(state.selected_task),
        format_func=lambda t: t.value,
        horizontal=True,
    )
    controller.select_task(task)

    text = st.text_area(
        "Your Text",
        value=state.input_text,
        height=200,
        placeholder="Enter your text here...",
    )
    controller.set_input_text(text)

    st.subheader("Choose a Tone")

    def _on_add_tone() -> None:
        controller.set_custom_tone_input(st.session_state.get("custom_tone_input", ""))
        if controller.add_custom_tone():
            st.session_state["custom_tone_input"] = ""

    with st.form("custom_tone_form", border=False):
        add_cols = st.columns([4, 1])
        with add_cols[0]:
            st.text_input(
                "Custom tone",
                key="custom_tone_input",
                placeholder="Add a custom tone...",
                label_visibility="collapsed",
            )
        with add_cols[1]:
            st.form_submit_button("Add", on_click=_on_add_tone)

    if state.form_error:
        st.error(state.form_error)

    tones = controller.all_tones
    tone = st.radio(
        "Tone",
        tones,
        index=tones.index(state.selected_tone) if state.selected_tone in tones else 0,
        horizontal=True,
        label_visibility="collapsed",
    )
    controller.select_tone(tone)

    if state.custom_tones:
        remove_cols = st.columns(min(len(state.custom_tones), 4))
        for i, custom in enumerate(state.custom_tones):
            with remove_cols[i % len(remove_cols)]:
                st.button(
                    f"✕ {custom}",
                    key=f"remove_tone_{custom}",
                    help=f"Remove {custom} tone",
                    on_click=controller.remove_custom_tone,
                    args=(custom,),
                )

    if st.button(
        "Processing..." if state.is_loading else "Process Text",
        type="primary",
        disabled=state.is_loading,
        use_container_width=True,
    ):
        with st.spinner("Processing..."):
            start = time.monotonic()
            result = asyncio.run(controller.process())
        if result is not None:
            _record_usage(result, time.monotonic() - start)
        st.rerun()

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

with col_out:
    head_cols = st.columns([4, 1])
    with head_cols[0]:
        st.subheader("Output")
    with head_cols[1]:
        copy_control = controller.copy_control()
        if copy_control:
            components.html(copy_control, height=45)

    with st.container(border=True):
        if state.api_error:
            st.error(state.api_error)
        elif state.output_text:
            st.text(state.output_text)
        else:
            st.caption("Your result will appear here.")

st.caption("Powered by Anthropic Claude. Built with Streamlit.")
