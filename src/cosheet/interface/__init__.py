"""Command surface and chat output."""

from .broadcast import Broadcaster, ConsoleBroadcaster, RecordingBroadcaster, SentMessage
from .commands import (
    ApplyMarkerOps,
    Command,
    CommandResult,
    LinkBars,
    RenderMenu,
    RollStats,
    SheetHelper,
    ShowGMSheet,
    UpdateConfig,
    parse_command,
)

__all__ = [
    "Broadcaster",
    "ConsoleBroadcaster",
    "RecordingBroadcaster",
    "SentMessage",
    "ApplyMarkerOps",
    "Command",
    "CommandResult",
    "LinkBars",
    "RenderMenu",
    "RollStats",
    "SheetHelper",
    "ShowGMSheet",
    "UpdateConfig",
    "parse_command",
]
