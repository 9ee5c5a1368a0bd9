"""Tasks, languages and tones offered by the refiner."""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    ENGLISH = "English"
    BANGLISH = "Banglish (Bengali in English letters)"
    BANGLA = "Bengali (Bangla script)"


class Task(str, Enum):
    REFINE_ENGLISH = "Refine English"
    REFINE_BANGLISH = "Refine Banglish"
    REFINE_BANGLA = "Refine Bangla"
    BANGLISH_TO_ENGLISH = "Banglish to English"

    @property
    def language(self) -> Language | None:
        """Language a refine task keeps its output in; None for conversion."""
        return TASK_LANGUAGES.get(self)


class Tone(str, Enum):
    PROFESSIONAL = "Professional"
    CASUAL = "Casual"
    CRAZY = "Crazy"
    COOL = "Cool"


TASK_LANGUAGES: dict[Task, Language] = {
    Task.REFINE_ENGLISH: Language.ENGLISH,
    Task.REFINE_BANGLISH: Language.BANGLISH,
    Task.REFINE_BANGLA: Language.BANGLA,
}

PREDEFINED_TONES: list[str] = [tone.value for tone in Tone]
DEFAULT_TONE = Tone.PROFESSIONAL.value
DEFAULT_TASK = Task.REFINE_ENGLISH
