"""Interactive session: modes, focus, key dispatch, and the state machine."""

from .keys import KeyBinding, KeyMap
from .machine import Session
from .state import FOCUS_ORDER, FORM_MODES, Focus, FormStep, IdentityForm, Mode

__all__ = [
    "FOCUS_ORDER",
    "FORM_MODES",
    "Focus",
    "FormStep",
    "IdentityForm",
    "KeyBinding",
    "KeyMap",
    "Mode",
    "Session",
]
