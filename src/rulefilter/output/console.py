"""Rich theme and the off-screen console used by the renderers.

Renderers draw on a console whose output is captured and returned as a
string, so the CLI decides where (stdout or stderr) the text goes.
"""

from __future__ import annotations

from collections.abc import Callable

from rich.console import Console
from rich.theme import Theme

RENDER_WIDTH = 120

RULEFILTER_THEME = Theme(
    {
        "rf.ok": "bold green",
        "rf.error": "bold red",
        "rf.warning": "bold yellow",
        "rf.op": "bold cyan",
        "rf.key": "dim",
        "rf.code": "bold magenta",
        "rf.rule": "bold blue",
        "rf.value": "bold",
    }
)


def render_to_text(draw: Callable[[Console], None]) -> str:
    """Run *draw* against a fresh console and return what it printed."""
    console = Console(
        theme=RULEFILTER_THEME,
        width=RENDER_WIDTH,
        force_terminal=False,
        highlight=False,
    )
    with console.capture() as capture:
        draw(console)
    return capture.get()
