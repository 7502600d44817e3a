"""Terminal styling for rendered comparisons."""

from __future__ import annotations

import os
import re
import sys
import threading
from dataclasses import dataclass
from typing import Literal, TextIO

from rich.color import ColorSystem
from rich.console import COLOR_SYSTEMS, Console
from rich.style import Style

from pretty_compare.config.models import ColorMode, StyleSettings
from pretty_compare.runtime_logging import get_runtime_logger

if os.name == "nt":
    import ctypes
    from ctypes import wintypes

StyleRole = Literal[
    "removed",
    "added",
    "removed_highlight",
    "added_highlight",
    "header",
    "note",
]

_SGR_RE = re.compile(r"\x1b\[[0-9;]*m")

_init_lock = threading.Lock()
_init_result: bool | None = None


@dataclass(frozen=True, slots=True)
class StyleSpec:
    removed: Style
    added: Style
    removed_highlight: Style
    added_highlight: Style
    header: Style
    note: Style

    @classmethod
    def from_settings(cls, settings: StyleSettings | None = None) -> "StyleSpec":
        settings = settings or StyleSettings()
        return cls(
            removed=Style.parse(settings.removed),
            added=Style.parse(settings.added),
            removed_highlight=Style.parse(settings.removed_highlight),
            added_highlight=Style.parse(settings.added_highlight),
            header=Style.parse(settings.header),
            note=Style.parse(settings.note),
        )


class Styler:
    """Wraps text in SGR codes, or leaves it untouched when disabled."""

    def __init__(
        self,
        spec: StyleSpec | None = None,
        *,
        color_system: ColorSystem | None = ColorSystem.EIGHT_BIT,
    ) -> None:
        self.spec = spec or StyleSpec.from_settings()
        self.color_system = color_system

    @classmethod
    def disabled(cls, spec: StyleSpec | None = None) -> "Styler":
        return cls(spec, color_system=None)

    @property
    def enabled(self) -> bool:
        return self.color_system is not None

    def style(self, text: str, style: Style | str) -> str:
        if not self.enabled or not text:
            return text
        if isinstance(style, str):
            style = Style.parse(style)
        return style.render(text, color_system=self.color_system)

    def paint(self, text: str, role: StyleRole) -> str:
        return self.style(text, getattr(self.spec, role))


def strip_styles(text: str) -> str:
    return _SGR_RE.sub("", text)


def detect_color_system(mode: ColorMode = "auto", stream: TextIO | None = None) -> ColorSystem | None:
    """Resolve the colour system to render with, ``None`` meaning no styling.

    ``auto`` defers to rich's terminal detection for ``stream`` (TTY checks,
    ``NO_COLOR``, ``FORCE_COLOR`` and ``TERM=dumb``).
    """
    if mode == "never":
        return None
    if mode == "always":
        return ColorSystem.EIGHT_BIT
    console = Console(file=stream or sys.stderr)
    if console.no_color or console.color_system is None:
        return None
    return COLOR_SYSTEMS[console.color_system]


def styler_for(
    settings: StyleSettings | None = None,
    *,
    mode: ColorMode = "auto",
    stream: TextIO | None = None,
) -> Styler:
    color_system = detect_color_system(mode, stream)
    if color_system is not None:
        init_terminal()
    return Styler(StyleSpec.from_settings(settings), color_system=color_system)


def init_terminal() -> bool:
    """Run the one-time terminal setup; safe to call any number of times.

    Returns whether escape sequences are expected to be interpreted. A
    failure only degrades styling and is never raised.
    """
    global _init_result

    with _init_lock:
        if _init_result is None:
            _init_result = _enable_virtual_terminal()
        return _init_result


def _enable_virtual_terminal() -> bool:
    logger = get_runtime_logger()
    if os.name != "nt":
        logger.debug("terminal.init", platform=sys.platform, native_ansi=True)
        return True

    std_output_handle = -11
    std_error_handle = -12
    enable_virtual_terminal_processing = 0x0004

    try:
        kernel32 = ctypes.windll.kernel32
        enabled = True
        for handle_id in (std_output_handle, std_error_handle):
            handle = kernel32.GetStdHandle(handle_id)
            mode = wintypes.DWORD()
            if kernel32.GetConsoleMode(handle, ctypes.byref(mode)) == 0:
                enabled = False
                continue
            new_mode = mode.value | enable_virtual_terminal_processing
            if kernel32.SetConsoleMode(handle, new_mode) == 0:
                enabled = False
    except (AttributeError, OSError) as exc:
        logger.warning(
            "terminal.init_failed",
            error_type=exc.__class__.__name__,
            error_message=str(exc),
        )
        return False

    if enabled:
        logger.debug("terminal.init", platform=sys.platform, native_ansi=False)
    else:
        logger.warning("terminal.init_failed", error_type="SetConsoleMode", error_message="")
    return enabled
