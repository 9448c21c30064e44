# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Coloured console rendering of tick decisions."""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Tuple

if TYPE_CHECKING:
    from netminder.engine.goalkeeper import TickDecision

ANSI_COLOURS: Dict[str, str] = {
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "default": "\x1b[0m",
}
RESET = "\x1b[0m"


def colourise(message: str, colour: str) -> str:
    """Wrap ``message`` in the ANSI escape for ``colour``.

    Parameters
    ----------
    message : str
        Text to colour.
    colour : str
        Colour name; unknown names fall back to the terminal default.

    Returns
    -------
    str
        Escaped message terminated by a reset code.
    """
    return f"{ANSI_COLOURS.get(colour, RESET)}{message}{RESET}"


def describe_decision(decision: "TickDecision") -> List[Tuple[str, str]]:
    """Turn a tick decision into ``(colour, message)`` console lines.

    Parameters
    ----------
    decision : TickDecision
        Outcome returned by the decision engine.

    Returns
    -------
    List[Tuple[str, str]]
        Lines in display order.
    """
    if decision.is_idle:
        return [("default", "[INFO] Ball is outside the target box. Maintaining position.")]

    lines: List[Tuple[str, str]] = []
    if decision.forecast is not None:
        forecast = decision.forecast
        lines.append(("blue", f"[TRAJECTORY] Predicted ball position: ({forecast.x:.2f}, {forecast.y:.2f})"))
    if decision.goalie_time is not None:
        lines.append(("yellow", f"[TIME] Goalie time to intercept: {decision.goalie_time:.2f}s"))
    if decision.enemy_time is not None:
        lines.append(("yellow", f"[TIME] Enemy time to intercept: {decision.enemy_time:.2f}s"))

    if decision.is_intercepting:
        target = decision.target
        kind = decision.action.kind
        if kind == "pass":
            lines.append(("yellow", "[INFO] Path to goal is blocked. Passing to teammate."))
        elif kind == "shoot" and decision.path_blocked:
            lines.append(("yellow", "[INFO] Path to goal is blocked and no teammate is available."))
        elif kind == "shoot":
            lines.append(("yellow", "[INFO] Path to goal is clear. Shooting towards goal."))
        else:
            lines.append(("yellow", "[INFO] Goalie can intercept the ball before the enemy."))
        lines.append(("red", f"[ACTION] Intercepting, moving towards ({target.x:.2f}, {target.y:.2f})"))
        if decision.movement_vector is not None:
            mv = decision.movement_vector
            lines.append(("blue", f"[INFO] Movement vector: ({mv.x:.2f}, {mv.y:.2f})"))
    else:
        lines.append(("green", f"[INFO] {decision.reason.capitalize()}. Entering safe mode."))
    return lines


def print_decision(decision: "TickDecision") -> None:
    """Print a tick decision to stdout with ANSI colours.

    Parameters
    ----------
    decision : TickDecision
        Outcome returned by the decision engine.
    """
    for colour, message in describe_decision(decision):
        print(colourise(message, colour))
