"""
COSheet: chat menus, token markers and bar links for the
Chroniques Oubliées Contemporain (COC) and Galactiques (COG) sheets.
"""

from .config import DEFAULT_CONFIG, MOD_VERSION, ConfigUpdate, HelperConfig
from .interface import SheetHelper

__version__ = MOD_VERSION

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigUpdate",
    "HelperConfig",
    "SheetHelper",
]
