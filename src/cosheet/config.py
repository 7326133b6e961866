"""
Helper configuration.

The configuration is an explicit value handed to every renderer, marker
and bar call. It only changes through apply_config_update(), which
returns a new value.
"""

from pydantic import BaseModel, Field

from .sheets.registry import BarTable
from .state.schema import Archetype, Universe

MOD_NAME = "Mod:COSH"
MOD_VERSION = "1.1.0"
COMMAND = "!cosh"  # Chat command prefix used in generated buttons


class HelperConfig(BaseModel):
    """Helper configuration."""
    universe: Universe = Universe.COC  # Which sheet family is in use
    whisper: bool = False  # Whisper menus to the GM
    logging: bool = False  # Trace broadcast chat at INFO level
    bar_overrides: dict[Universe, dict[Archetype, BarTable]] = Field(default_factory=dict)


class ConfigUpdate(BaseModel):
    """A change to the configuration, as requested from chat."""
    universe: Universe | None = None
    toggle_whisper: bool = False
    toggle_logging: bool = False


DEFAULT_CONFIG = HelperConfig()


def apply_config_update(config: HelperConfig, update: ConfigUpdate) -> HelperConfig:
    """Return a copy of config with the update applied."""
    changes: dict = {}
    if update.universe is not None:
        changes["universe"] = update.universe
    if update.toggle_whisper:
        changes["whisper"] = not config.whisper
    if update.toggle_logging:
        changes["logging"] = not config.logging
    return config.model_copy(update=changes)


def render_config(config: HelperConfig) -> str:
    """Chat block showing the configuration with toggle buttons."""
    other = Universe.COG if config.universe == Universe.COC else Universe.COC
    return (
        f"&{{template:default}} {{{{name={MOD_NAME} v{MOD_VERSION} Config}}}}"
        f"{{{{Univers=*{config.universe.value}* "
        f"[{other.value}]({COMMAND} config --universe {other.value})}}}} "
        f"{{{{Msg privés=*{str(config.whisper).lower()}* [Toggle]({COMMAND} config --whisper)}}}}"
        f"{{{{Logging=*{str(config.logging).lower()}* [Toggle]({COMMAND} config --log)}}}}"
    )
