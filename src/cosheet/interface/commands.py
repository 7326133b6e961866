"""
Typed command surface.

The chat parser builds one of the command models below; SheetHelper runs
it against the store and broadcasts whatever chat it produces. Commands
are a closed set discriminated by `kind`.

Usage:
    helper = SheetHelper(store, RecordingBroadcaster())
    helper.execute(RenderMenu(menu=MenuKind.PATHS, character_id="abc123"))
    helper.execute(parse_command({"kind": "markers", "token_id": "t1",
                                  "ops": [{"op": "+", "name": "dead"}]}))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, Callable, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from ..config import (
    DEFAULT_CONFIG,
    MOD_NAME,
    ConfigUpdate,
    HelperConfig,
    apply_config_update,
    render_config,
)
from ..menus import render_gm_sheet, render_menu
from ..menus.chat import ALL, GM, GM_WHISPER, ChatMessage, MenuArgs, MenuKind
from ..rules.bars import BarLinkSummary, link_bars
from ..rules.markers import MarkerOp, MarkerUpdate, sync_markers
from ..rules.stats import render_stats, roll_stats
from ..state.store import GameStore
from .broadcast import Broadcaster

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

class RenderMenu(BaseModel):
    """Show a character menu (`!cosh actions --...`)."""
    kind: Literal["menu"] = "menu"
    menu: MenuKind
    character_id: str
    args: MenuArgs = Field(default_factory=MenuArgs)


class ApplyMarkerOps(BaseModel):
    """Set or unset markers on a token (`!cosh token --set:...`)."""
    kind: Literal["markers"] = "markers"
    token_id: str
    ops: list[MarkerOp] = Field(default_factory=list)


class LinkBars(BaseModel):
    """Link a token to its character and set up its bars."""
    kind: Literal["bars"] = "bars"
    token_id: str
    mook: bool = False
    character_id: str | None = None


class ShowGMSheet(BaseModel):
    """Whisper a character's stat block to the GM (`!cosh gmsheet`)."""
    kind: Literal["gmsheet"] = "gmsheet"
    character_id: str


class RollStats(BaseModel):
    """Roll characteristics for a new character (`!cosh stats`)."""
    kind: Literal["stats"] = "stats"
    values: list[int] = Field(default_factory=list)


class UpdateConfig(BaseModel):
    """Change and display the configuration (`!cosh config`)."""
    kind: Literal["config"] = "config"
    update: ConfigUpdate = Field(default_factory=ConfigUpdate)


Command = Annotated[
    Union[RenderMenu, ApplyMarkerOps, LinkBars, ShowGMSheet, RollStats, UpdateConfig],
    Field(discriminator="kind"),
]

_command_adapter: TypeAdapter = TypeAdapter(Command)


def parse_command(data: dict[str, Any]) -> Command:
    """Build a command from its dict form. Raises ValidationError."""
    return _command_adapter.validate_python(data)


# -----------------------------------------------------------------------------
# Execution
# -----------------------------------------------------------------------------

@dataclass
class CommandResult:
    """What a command produced."""
    messages: list[ChatMessage] = field(default_factory=list)
    markers: MarkerUpdate | None = None
    bars: BarLinkSummary | None = None
    config: HelperConfig | None = None


class SheetHelper:
    """
    Runs commands against a game store.

    Holds the configuration; only UpdateConfig replaces it.
    """

    def __init__(
        self,
        store: GameStore,
        broadcaster: Broadcaster,
        config: HelperConfig | None = None,
    ):
        self.store = store
        self.broadcaster = broadcaster
        self.config = config or DEFAULT_CONFIG
        self._handlers: dict[type, Callable[[Any], CommandResult]] = {
            RenderMenu: self._render_menu,
            ApplyMarkerOps: self._apply_markers,
            LinkBars: self._link_bars,
            ShowGMSheet: self._gm_sheet,
            RollStats: self._roll_stats,
            UpdateConfig: self._update_config,
        }

    def execute(self, command: Command) -> CommandResult:
        """Run a command and broadcast its chat output."""
        result = self._handlers[type(command)](command)
        for message in result.messages:
            self._send(message)
        return result

    def _send(self, message: ChatMessage) -> None:
        level = logging.INFO if self.config.logging else logging.DEBUG
        logger.log(level, f"{MOD_NAME} | {message.text}")
        self.broadcaster.broadcast(message.text, message.recipient)

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def _render_menu(self, command: RenderMenu) -> CommandResult:
        message = render_menu(self.store, command.menu, command.character_id, self.config, command.args)
        return CommandResult(messages=[message] if message else [])

    def _apply_markers(self, command: ApplyMarkerOps) -> CommandResult:
        return CommandResult(markers=sync_markers(self.store, command.token_id, command.ops))

    def _link_bars(self, command: LinkBars) -> CommandResult:
        summary = link_bars(
            self.store,
            command.token_id,
            self.config,
            mook=command.mook,
            character_id=command.character_id,
        )
        return CommandResult(bars=summary)

    def _gm_sheet(self, command: ShowGMSheet) -> CommandResult:
        message = render_gm_sheet(self.store, command.character_id, self.config)
        return CommandResult(messages=[message] if message else [])

    def _roll_stats(self, command: RollStats) -> CommandResult:
        text = render_stats(roll_stats(command.values))
        return CommandResult(messages=[ChatMessage(text, ALL)])

    def _update_config(self, command: UpdateConfig) -> CommandResult:
        self.config = apply_config_update(self.config, command.update)
        logger.info(
            f"Config: universe={self.config.universe.value} "
            f"whisper={self.config.whisper} logging={self.config.logging}"
        )
        message = ChatMessage(GM_WHISPER + render_config(self.config), GM)
        return CommandResult(messages=[message], config=self.config)
