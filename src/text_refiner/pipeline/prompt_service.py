"""Prompt service: turns (text, task, tone) into one Claude call."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from text_refiner.clients.llm_client import DEFAULT_MODEL, LLMClient, classify_error
from text_refiner.models.request import RefineRequest
from text_refiner.models.result import ERROR_MARKER, ProcessResult
from text_refiner.models.task import DEFAULT_TONE, Language, Task

logger = logging.getLogger(__name__)

REFINE_SYSTEM = (
    "You are a linguistic expert specializing in text transformation. "
    "Your task is to rewrite the user's text into a specific tone while preserving "
    "the core message and the original language. "
    f"You are proficient in {Language.ENGLISH.value}, {Language.BANGLISH.value}, "
    f"and {Language.BANGLA.value}. "
    "Do not add any extra commentary, just provide the refined text."
)

CONVERT_SYSTEM = (
    "You are a linguistic expert fluent in Bengali and English. "
    "Your task is to translate Banglish (Bengali written in English letters) into "
    "natural, fluent English while applying the requested tone and preserving the "
    "core message. "
    "Do not add any extra commentary, just provide the translated text."
)

REFINE_PROMPT = """\
Please refine the following '{language}' text into a '{tone}' tone.
Ensure the output remains in '{language}'.

Original Text:
---
{text}
---"""

CONVERT_PROMPT = """\
Please translate the following Banglish text into English, using a '{tone}' tone.
The output must be in English only.

Original Text:
---
{text}
---"""


@dataclass(frozen=True)
class PromptTemplate:
    system: str
    prompt: str
    action: str  # verb used in the failure message


REFINE_TEMPLATE = PromptTemplate(system=REFINE_SYSTEM, prompt=REFINE_PROMPT, action="refine")
CONVERT_TEMPLATE = PromptTemplate(system=CONVERT_SYSTEM, prompt=CONVERT_PROMPT, action="process")


def template_for(task: Task) -> PromptTemplate:
    return CONVERT_TEMPLATE if task is Task.BANGLISH_TO_ENGLISH else REFINE_TEMPLATE


def build_prompt(request: RefineRequest) -> tuple[str, str]:
    """Return ``(system, prompt)`` for a request."""
    template = template_for(request.task)
    language = request.task.language
    prompt = template.prompt.format(
        language=language.value if language is not None else "",
        tone=request.tone,
        text=request.text,
    )
    return template.system, prompt


def failure_message(action: str, detail: str) -> str:
    if not detail:
        return f"{ERROR_MARKER} An unknown error occurred while processing text."
    return f"{ERROR_MARKER} Failed to {action} text. {detail}"


class PromptService:
    """Build prompts for refine/convert tasks and normalize the model output.

    Failures never propagate: they come back as a failed ProcessResult.
    """

    def __init__(
        self,
        llm: LLMClient,
        *,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.8,
        top_p: float | None = 0.9,
        max_tokens: int = 2048,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens

    async def process(self, request: RefineRequest) -> ProcessResult:
        """Run the request's task. Blank text returns an empty result without a call."""
        if request.is_blank:
            return ProcessResult.success("")

        system, prompt = build_prompt(request)
        action = template_for(request.task).action

        try:
            response = await self.llm.generate(
                prompt=prompt,
                system=system,
                model=self.model,
                temperature=self.temperature,
                top_p=self.top_p,
                max_tokens=self.max_tokens,
            )
        except Exception as exc:
            logger.exception("Failed to %s text (task=%s)", action, request.task.value)
            return ProcessResult.failure(
                classify_error(exc),
                failure_message(action, str(exc)),
                model=self.model,
            )

        return ProcessResult.success(
            response.text.strip(),
            model=self.model,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
        )

    async def refine_text(
        self,
        text: str,
        language: Language,
        tone: str = DEFAULT_TONE,
    ) -> ProcessResult:
        """Rewrite ``text`` in ``tone`` keeping it in ``language``."""
        task = next(t for t in Task if t.language is language)
        return await self.process(RefineRequest(text=text, task=task, tone=tone))

    async def convert_banglish_to_english(self, text: str, tone: str = DEFAULT_TONE) -> ProcessResult:
        return await self.process(
            RefineRequest(text=text, task=Task.BANGLISH_TO_ENGLISH, tone=tone)
        )
