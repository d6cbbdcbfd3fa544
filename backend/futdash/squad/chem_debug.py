"""
Chemistry debug panel for the squad builder.

Renders a pre-computed chemistry breakdown; chemistry itself is computed
by the squad builder and only displayed here.
"""

from html import escape
from typing import Dict, Iterable, Optional, Tuple

from futdash.api.schemas.squad import ChemDebug

EMPTY_VALUE = "—"


def _counts_column(title: str, counts: Dict[str, int]) -> str:
    items = "".join(
        f'<div class="flex justify-between"><span>{escape(name)}</span><span>{count}</span></div>'
        for name, count in counts.items()
    )
    return f'<div><div class="text-gray-400 mb-1">{escape(title)}</div>{items}</div>'


def _joined(values: Iterable[str]) -> str:
    return escape(", ".join(values)) or EMPTY_VALUE


def _cell(value: Optional[str]) -> str:
    return escape(value) if value else EMPTY_VALUE


def render_chem_debug(debug: Optional[ChemDebug], per_player_chem: Dict[str, int]) -> str:
    """
    Render the debug panel.

    Args:
        debug: Breakdown from the squad builder, or None when debugging is off
        per_player_chem: Chemistry score per player id; missing ids show 0

    Returns:
        HTML fragment (empty string when debug is None)
    """
    if debug is None:
        return ""

    columns: Tuple[Tuple[str, Dict[str, int]], ...] = (
        ("Clubs", debug.clubs),
        ("Nations", debug.nations),
        ("Leagues", debug.leagues),
    )

    rows = "".join(
        '<tr class="border-t border-gray-800">'
        f"<td>{escape(row.name)}</td>"
        f"<td>{escape(row.slot)}</td>"
        f'<td class="{"text-green-400" if row.in_pos else "text-red-400"}">'
        f'{"true" if row.in_pos else "false"}</td>'
        f"<td>{escape(row.positions)}</td>"
        f"<td>{_cell(row.club)}</td>"
        f"<td>{_cell(row.nation)}</td>"
        f"<td>{_cell(row.league)}</td>"
        f"<td>{per_player_chem.get(row.id, 0)}</td>"
        "</tr>"
        for row in debug.rows
    )

    return (
        '<div class="chem-debug" data-widget="chem-debug">'
        '<div class="font-bold text-green-400 mb-2">Chem Debug</div>'
        '<div class="grid grid-cols-3 gap-2 mb-2">'
        + "".join(_counts_column(title, counts) for title, counts in columns)
        + "</div>"
        '<div class="mb-2 text-gray-300">'
        f"<div>In-position contributors: {_joined(debug.in_pos_contributors)}</div>"
        f"<div>Icons (3/3): {_joined(debug.icons)}</div>"
        f"<div>Heroes (3/3): {_joined(debug.heroes)}</div>"
        "</div>"
        '<div class="mt-2"><div class="text-gray-400 mb-1">Players</div>'
        '<table class="w-full text-left border border-gray-700">'
        "<thead><tr>"
        "<th>Name</th><th>Slot</th><th>InPos</th><th>Pos</th>"
        "<th>Club</th><th>Nation</th><th>League</th><th>Chem</th>"
        "</tr></thead>"
        f"<tbody>{rows}</tbody>"
        "</table></div>"
        "</div>"
    )
