"""
Path ("voie") menus.

A character has up to 9 paths, each with 5 ranks. A rank is acquired when
its flag attribute holds the string "1".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..config import COMMAND
from ..sheets.repeating import char_attr, repeat_attr, row_ids_for
from .chat import LINE_BREAK, MenuArgs, button, character_name, co_template, roll_button

if TYPE_CHECKING:
    from ..sheets.registry import PathFields, SheetSchema
    from ..state.schema import Archetype
    from ..state.store import GameStore

MAX_PATHS = 9
MAX_RANKS = 5

ROLL_ICON = "🎲"


@dataclass
class Rank:
    """An acquired rank of a path."""
    path: int
    number: int
    title: str
    extended: str = ""  # Rest of the description

    @property
    def rank_id(self) -> str:
        return f"v{self.path}r{self.number}"

    @property
    def items(self) -> list[str]:
        """
        Button labels of the abilities named in the title.

        Abilities are `;` separated. Each may be written
        `ability name | display label`, in which case the label is shown.
        """
        labels = []
        for item in self.title.split(";"):
            name, _, label = item.partition("|")
            if not name.strip():
                continue
            labels.append(label.split("|")[0].strip() if label else name.strip())
        return labels


def path_ranks(store: "GameStore", character_id: str, fields: "PathFields", path: int) -> list[Rank]:
    """
    Acquired ranks of a path, in rank order.

    The label is the rank title, or the first line of the rank
    description when the title is empty.
    """
    ranks = []
    for number in range(1, MAX_RANKS + 1):
        names = {"path": path, "rank": number}
        if store.get_attribute_value(character_id, fields.flag.format(**names)) != "1":
            continue

        title = store.get_attribute_value(character_id, fields.title.format(**names))
        description = store.get_attribute_value(character_id, fields.description.format(**names))
        if title:
            extended = description
        else:
            title, _, extended = description.partition("\n")

        ranks.append(Rank(path=path, number=number, title=title.strip(), extended=extended.strip()))
    return ranks


def find_rank_roll(store: "GameStore", character_id: str, schema: "SheetSchema", rank_id: str) -> str | None:
    """Roll of the skill row linked to a rank id, if any."""
    if not schema.has("capa_section", "capa_link", "capa_roll"):
        return None
    for row_id in row_ids_for(store, character_id, schema.capa_section):
        link = store.get_attribute_value(character_id, repeat_attr(schema.capa_section, row_id, schema.capa_link))
        if link.lower() == rank_id:
            return repeat_attr(schema.capa_section, row_id, schema.capa_roll)
    return None


def render_paths(
    store: "GameStore",
    character_id: str,
    schema: "SheetSchema",
    archetype: "Archetype",
    args: MenuArgs,
) -> str:
    """List of the character's paths, each linking to its detail menu."""
    if schema.paths is None:
        return ""

    option = " --desc" if args.descriptions else ""
    lines = []
    for path in range(1, MAX_PATHS + 1):
        path_name = store.get_attribute_value(character_id, schema.paths.name.format(path=path))
        if path_name == "":
            continue
        action = f"{COMMAND} actions --voie {path}{option} --charId={character_id}"
        lines.append(button(f"{path}. {path_name}", action) + LINE_BREAK)

    if not lines:
        return ""

    name = character_name(store, character_id)
    return co_template(
        char_attr(name, "character_name"),
        char_attr(name, "PROFIL"),
        "Capacités",
        "".join(lines),
    )


def _rank_line(store: "GameStore", character_id: str, schema: "SheetSchema", rank: Rank, descriptions: bool) -> str:
    if descriptions:
        line = f"{rank.number}. {rank.title}"
        if rank.extended:
            line += " : " + " ".join(rank.extended.split())
        return line

    links = []
    for index, item in enumerate(rank.items):
        label = f"{rank.number}. {item}" if index == 0 else item
        links.append(roll_button(label, character_id, rank.rank_id))
    line = ", ".join(links)

    roll = find_rank_roll(store, character_id, schema, rank.rank_id)
    if roll is not None:
        line += " " + roll_button(ROLL_ICON, character_id, roll)
    return line


def render_path(
    store: "GameStore",
    character_id: str,
    schema: "SheetSchema",
    archetype: "Archetype",
    args: MenuArgs,
) -> str:
    """Acquired ranks of one path, with roll buttons where a roll exists."""
    if schema.paths is None or args.path is None:
        return ""

    lines = []
    for rank in path_ranks(store, character_id, schema.paths, args.path):
        if not rank.items:
            continue
        lines.append(_rank_line(store, character_id, schema, rank, args.descriptions) + LINE_BREAK)

    if not lines:
        return ""

    name = character_name(store, character_id)
    return co_template(
        name,
        "Capacités",
        char_attr(name, schema.paths.name.format(path=args.path)),
        "".join(lines),
    )
