"""Terminal capability probes.

Best-effort checks for what the attached terminal can render: OSC-8
hyperlinks and non-ASCII glyphs. Everything here degrades to plain text.
"""

from __future__ import annotations

import os
import sys
from typing import TextIO

import click

# Terminals known to render OSC-8 links (matched against $TERM_PROGRAM).
OSC8_TERM_PROGRAMS = frozenset({"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"})


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Guess whether ``stream`` (default stdout) renders OSC-8 hyperlinks.

    Never true for a stream that is not a TTY.
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False

    return bool(
        (os.getenv("TERM_PROGRAM") or "").lower() in OSC8_TERM_PROGRAMS
        or os.getenv("WT_SESSION")  # Windows Terminal
        or os.getenv("VTE_VERSION")  # GNOME Terminal, Tilix, ...
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, label: str | None = None) -> str:
    """Render ``url`` as a clickable link, or as plain text if unsupported.

    Args:
        url: Link target.
        label: Text to show instead of the URL (terminals with OSC-8 only).
    """
    if not supports_osc8():
        return url
    return f"\x1b]8;;{url}\x07{label or url}\x1b]8;;\x07"


def supports_character(character: str) -> bool:
    """True if ``character`` can be encoded for stderr.

    Lets callers fall back to ASCII instead of hitting ``UnicodeEncodeError``
    on non-UTF-8 consoles.
    """
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True
