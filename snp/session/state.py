"""Session modes, panel focus, and the folder/name/language input form."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Mode(enum.Enum):
    NAVIGATING = "navigating"
    FILTERING = "filtering"
    CONFIRMING_COPY = "confirming-copy"
    CONFIRMING_DELETE = "confirming-delete"
    CREATING = "creating"
    RENAMING = "renaming"


class Focus(enum.Enum):
    FOLDERS = "folders"
    SNIPPETS = "snippets"
    CONTENT = "content"


FOCUS_ORDER: tuple[Focus, ...] = (Focus.FOLDERS, Focus.SNIPPETS, Focus.CONTENT)
FORM_MODES = frozenset({Mode.CREATING, Mode.RENAMING})


class FormStep(enum.IntEnum):
    FOLDER = 0
    NAME = 1
    LANGUAGE = 2


FORM_LABELS: dict[FormStep, str] = {
    FormStep.FOLDER: "Folder",
    FormStep.NAME: "Name",
    FormStep.LANGUAGE: "Language",
}


@dataclass
class IdentityForm:
    """Three sequential text fields collected one step at a time.

    Each field starts prefilled with its default; editing only ever touches
    the field of the current step.
    """

    values: list[str] = field(default_factory=lambda: ["", "", ""])
    step: FormStep = FormStep.FOLDER

    @classmethod
    def prefilled(cls, folder: str, name: str, language: str) -> IdentityForm:
        return cls(values=[folder, name, language])

    @property
    def current(self) -> str:
        return self.values[self.step]

    def _set_current(self, value: str) -> None:
        self.values[self.step] = value

    def insert(self, text: str) -> None:
        self._set_current(self.current + text)

    def backspace(self) -> None:
        self._set_current(self.current[:-1])

    def clear(self) -> None:
        self._set_current("")

    def advance(self) -> bool:
        """Move to the next field; return ``True`` when the last one was confirmed."""
        if self.step == FormStep.LANGUAGE:
            return True
        self.step = FormStep(self.step + 1)
        return False

    def back(self) -> bool:
        if self.step == FormStep.FOLDER:
            return False
        self.step = FormStep(self.step - 1)
        return True

    def triple(self) -> tuple[str, str, str]:
        folder, name, language = self.values
        return folder, name, language
