"""OSC-8 hyperlink utilities for the sundries CLI.

Provides a small heuristic to detect whether the active text stream supports
OSC-8 terminal hyperlinks and a helper to render a URL as a clickable link,
falling back to plain text when unsupported.
"""

import os
import sys
from typing import TextIO

_OSC8_TERM_PROGRAMS = {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"}


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Heuristically detect whether the target stream supports OSC-8 hyperlinks.

    Args:
        stream: File-like text stream to probe; defaults to ``sys.stdout``.

    Returns:
        bool: ``True`` if hyperlinks should be emitted; ``False`` otherwise.

    Notes:
        - Returns ``False`` when the stream is not a TTY (e.g., piped or redirected).
        - Uses a conservative allowlist based on terminal identifiers.
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    terminal_program = (os.getenv("TERM_PROGRAM") or "").lower()
    return bool(
        terminal_program in _OSC8_TERM_PROGRAMS
        or os.getenv("WT_SESSION")  # Windows Terminal
        or os.getenv("VTE_VERSION")  # GNOME Terminal, Tilix, etc.
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, label: str | None = None) -> str:
    """Return `url` as an OSC-8 hyperlink, or as plain text when unsupported.

    Args:
        url: Target URL.
        label: Visible text; defaults to the URL itself.

    Returns:
        str: The link wrapped in OSC-8 (BEL-terminated) sequences when
        supported, otherwise the plain label.
    """
    label = label or url
    if not supports_osc8():
        return label
    return f"\x1b]8;;{url}\x07{label}\x1b]8;;\x07"  # OSC 8 ; ; URL BEL
