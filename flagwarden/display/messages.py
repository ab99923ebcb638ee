"""Console message for a flag resolution.

Pure formatting: every decision has already been made by the resolver.
Links and the EXPERIMENTAL badge go through a :class:`TextRenderer` so
the same message can be produced as plain text (tests, log files) or
with terminal hyperlinks and colour (interactive consoles).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence

from rich.console import Console
from rich.style import Style
from rich.text import Text

from flagwarden.core.models import FlagDefinition, FlagResolution

ACTIVE_HEADER = "The following flags are active:"

EXPERIMENTAL_BADGE = "EXPERIMENTAL"

UMBRELLA_ISSUE_LABEL = "Umbrella Issue"

ROLLOUT_EXPLANATION = """We're shipping new features! For final testing, we're rolling them out first to a small % of users
and your site was automatically chosen as one of them. With your help, we'll then release them to everyone in the next minor release

We greatly appreciate your help testing the change. Please report any feedback good or bad in the umbrella issue. If you do encounter problems, please disable the flag by setting it to false in your config file like:

flags:
  THE_FLAG: false

The following were automatically enabled on your site:"""


# ── Renderers ────────────────────────────────────────────────────────────


class TextRenderer(ABC):
    """Turns links and badges into text for the message."""

    @abstractmethod
    def link(self, text: str, url: str) -> str:
        """Render *text* pointing at *url*."""

    @abstractmethod
    def badge(self, text: str) -> str:
        """Render a short highlighted marker."""


class PlainRenderer(TextRenderer):
    """No escape codes: links become ``text (url)``."""

    def link(self, text: str, url: str) -> str:
        return f"{text} ({url})"

    def badge(self, text: str) -> str:
        return text


class TerminalRenderer(TextRenderer):
    """Hyperlinks and colour through a ``rich`` console.

    Parameters
    ----------
    console:
        Console used to render the escape codes.  Defaults to a console
        that always emits them.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console or Console(
            force_terminal=True,
            color_system="standard",
            highlight=False,
            soft_wrap=True,
        )

    def _render(self, text: Text) -> str:
        with self._console.capture() as capture:
            self._console.print(text, end="")
        return capture.get()

    def link(self, text: str, url: str) -> str:
        return self._render(Text(text, style=Style(link=url)))

    def badge(self, text: str) -> str:
        return self._render(Text(text, style="bold white on red"))


# ── Message builder ──────────────────────────────────────────────────────


def flag_line(flag: FlagDefinition, renderer: TextRenderer) -> str:
    """Return the ``\\n- NAME · ...`` line describing *flag*."""
    line = f"\n- {flag.name}"
    if flag.experimental:
        line += f" · {renderer.badge(EXPERIMENTAL_BADGE)}"
    if flag.umbrella_issue_url:
        line += f" · ({renderer.link(UMBRELLA_ISSUE_LABEL, flag.umbrella_issue_url)})"
    line += f" · {flag.description}"
    return line


def other_flags_heading(count: int) -> str:
    if count == 1:
        return "There is one other flag available that you might be interested in:"
    return f"There are {count} other flags available that you might be interested in:"


def build_message(
    resolutions: Sequence[FlagResolution],
    available: Sequence[FlagDefinition],
    config: Mapping[str, bool],
    renderer: TextRenderer,
) -> str:
    """Describe the enabled flags; empty string when nothing is enabled.

    The "other flags" listing only appears when the user configured at
    least one flag themselves.
    """
    if not resolutions:
        return ""

    message = ACTIVE_HEADER
    for resolution in resolutions:
        if not resolution.opted_in:
            message += flag_line(resolution.flag, renderer)

    opted_in = [r for r in resolutions if r.opted_in]
    if opted_in:
        message += "\n"
        message += ROLLOUT_EXPLANATION
        for resolution in opted_in:
            message += flag_line(resolution.flag, renderer)

    other_count = len(available) - len(resolutions)
    if other_count > 0 and config:
        message += f"\n\n{other_flags_heading(other_count)}"
        enabled_names = {r.name for r in resolutions}
        for flag in available:
            if flag.name not in enabled_names:
                message += flag_line(flag, renderer)

    message += "\n"
    return message
