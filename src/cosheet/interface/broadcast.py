"""
Chat output.

The host chat is reached through the Broadcaster protocol. Two
implementations ship here: one recording messages (tests, scripting) and
one rendering them on a rich console.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable

from rich.box import ROUNDED
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..menus.chat import ALL, GM

# Recipient colors
RECIPIENT_COLORS = {
    ALL: "steel_blue",
    GM: "dark_goldenrod",
}
CHARACTER_COLOR = "cyan"


@runtime_checkable
class Broadcaster(Protocol):
    """Sends text to the chat. Recipient is "all", "gm" or a character id."""

    def broadcast(self, text: str, recipient: str = ALL) -> None:
        ...


@dataclass
class SentMessage:
    text: str
    recipient: str
    timestamp: datetime


class RecordingBroadcaster:
    """Keeps every broadcast message in memory."""

    def __init__(self):
        self.messages: list[SentMessage] = []

    def broadcast(self, text: str, recipient: str = ALL) -> None:
        self.messages.append(SentMessage(text=text, recipient=recipient, timestamp=datetime.now()))

    @property
    def last(self) -> SentMessage | None:
        return self.messages[-1] if self.messages else None

    def clear(self) -> None:
        self.messages.clear()


class ConsoleBroadcaster:
    """Prints each message as a timestamped panel titled by recipient."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def broadcast(self, text: str, recipient: str = ALL) -> None:
        color = RECIPIENT_COLORS.get(recipient, CHARACTER_COLOR)
        title = f"[{datetime.now().strftime('%H:%M')}] to {recipient}"

        self.console.print(Panel(
            Text(text.replace("\n\r", "\n")),
            title=Text(title, style=f"bold {color}"),
            title_align="left",
            border_style=color,
            box=ROUNDED,
            padding=(0, 1),
        ))
