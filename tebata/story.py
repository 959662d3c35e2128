"""Text banners framing the instructor's lines."""

from __future__ import annotations

_RULE = "***********************"


def open_banner() -> str:
    """Banner opening a block of dialogue."""
    return f"\n{_RULE}\n\n"


def close_banner() -> str:
    """Banner closing a block of dialogue."""
    return f"\n\n{_RULE}"


def framed(text: str) -> str:
    """``text`` between an opening and a closing banner."""
    return open_banner() + text + close_banner()


def classic_banner(story: int) -> str:
    """Banner pieces of the older lesson: 0 opens, 1 closes, -1 greets."""
    if story == 0:
        return f"\n{_RULE}\n\n\n"
    if story == -1:
        return "よろしくね"
    if story == 1:
        return f"\n\n\n{_RULE}"
    return ""