"""UI theme built from the configured color slots.

Themes are UI-only ANSI palettes (panel chrome, list rows, status bar). The
syntax highlighting style for snippet content is a separate setting.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .config import Config

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")
# Dim gray for rows in a blurred panel.
MUTED_COLOR = "237"


def _color_params(color: str, layer: int) -> str:
    """Return SGR parameters for ``color`` on foreground (38) or background (48)."""
    color = color.strip()
    match = _HEX_RE.match(color)
    if match:
        value = match.group(1)
        r, g, b = (int(value[i : i + 2], 16) for i in (0, 2, 4))
        return f"{layer};2;{r};{g};{b}"
    if color.isdigit() and 0 <= int(color) <= 255:
        return f"{layer};5;{int(color)}"
    return str(layer + 1)  # 39/49: terminal default


def fg(color: str) -> str:
    return f"\033[{_color_params(color, 38)}m"


def bg_fg(background: str, foreground: str) -> str:
    return f"\033[{_color_params(background, 48)};{_color_params(foreground, 38)}m"


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    divider: str
    title_focused: str
    title_blurred: str
    folder_selected: str
    folder_unselected: str
    folder_unselected_blurred: str
    snippet_title_selected: str
    snippet_subtitle_selected: str
    snippet_title_unselected: str
    snippet_subtitle_unselected: str
    copied_bar: str
    copied_title: str
    copied_subtitle: str
    deleted_bar: str
    deleted_title: str
    deleted_subtitle: str
    line_number: str
    empty_hint: str
    empty_hint_key: str
    input_label: str
    input_active: str
    status_bar: str
    status_error: str
    status_info: str


def build_theme(config: Config) -> UITheme:
    """Map the configured color slots onto semantic UI roles."""
    white = config.foreground
    black = config.background
    return UITheme(
        name="config",
        reset="\033[0m",
        divider=fg(config.gray),
        title_focused=bg_fg(config.blue, white),
        title_blurred=bg_fg(black, config.gray),
        folder_selected=fg(config.bright_blue),
        folder_unselected=fg(config.gray),
        folder_unselected_blurred=fg(MUTED_COLOR),
        snippet_title_selected=fg(config.bright_blue),
        snippet_subtitle_selected=fg(config.blue),
        snippet_title_unselected=fg(config.gray),
        snippet_subtitle_unselected=fg(MUTED_COLOR),
        copied_bar=bg_fg(config.green, white),
        copied_title=fg(config.bright_green),
        copied_subtitle=fg(config.green),
        deleted_bar=bg_fg(config.red, white),
        deleted_title=fg(config.bright_red),
        deleted_subtitle=fg(config.red),
        line_number=fg(config.gray),
        empty_hint=fg(config.gray),
        empty_hint_key=fg(config.bright_blue),
        input_label=fg(config.gray),
        input_active=fg(config.bright_blue),
        status_bar="\033[7m",
        status_error=bg_fg(config.red, white),
        status_info=bg_fg(config.green, white),
    )


PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    divider="",
    title_focused="",
    title_blurred="",
    folder_selected="",
    folder_unselected="",
    folder_unselected_blurred="",
    snippet_title_selected="",
    snippet_subtitle_selected="",
    snippet_title_unselected="",
    snippet_subtitle_unselected="",
    copied_bar="",
    copied_title="",
    copied_subtitle="",
    deleted_bar="",
    deleted_title="",
    deleted_subtitle="",
    line_number="",
    empty_hint="",
    empty_hint_key="",
    input_label="",
    input_active="",
    status_bar="",
    status_error="",
    status_info="",
)


def resolve_theme(config: Config, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for the config and color mode."""
    if no_color:
        return PLAIN_THEME
    return build_theme(config)


__all__ = [
    "UITheme",
    "PLAIN_THEME",
    "build_theme",
    "resolve_theme",
    "fg",
    "bg_fg",
]
