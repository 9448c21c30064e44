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
"""Utilities for building engine configuration from serialized scenarios.

A scenario file is a JSON document whose top-level sections mirror the
configuration groups (``motion``, ``arrival``, ``clearance``, ``zone``,
``decision``, ``simulation`` and ``scenario``). Every section and key is
optional; missing values keep their defaults so small hand-written files stay
usable. Coordinates are written as two-element lists.
"""
import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Tuple

from netminder.engine.config import EngineConfig


def _as_point(value: Any, key: str) -> Tuple[float, float]:
    """Coerce a JSON value into an ``(x, y)`` tuple.

    Parameters
    ----------
    value : Any
        Decoded JSON value, expected to be a two-element list.
    key : str
        Field name used in the error message.

    Returns
    -------
    Tuple[float, float]
        Coordinates as floats.

    Raises
    ------
    ValueError
        Raised when ``value`` is not a pair of numbers.
    """
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"'{key}' must be a two-element [x, y] list, got {value!r}")
    try:
        return (float(value[0]), float(value[1]))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{key}' must contain numbers, got {value!r}") from exc


def config_from_dict(d: Dict[str, Any]) -> EngineConfig:
    """Build an ``EngineConfig`` from a plain dictionary payload.

    Parameters
    ----------
    d
        Mapping of section name to a mapping of overrides. Unknown sections
        and keys are ignored.

    Returns
    -------
    EngineConfig
        Configuration with overrides applied on top of the defaults.

    """
    config = EngineConfig()
    for section in fields(config):
        overrides = d.get(section.name) or {}
        group = getattr(config, section.name)
        for item in fields(group):
            if item.name not in overrides:
                continue
            raw = overrides[item.name]
            if isinstance(getattr(group, item.name), tuple):
                value = _as_point(raw, f"{section.name}.{item.name}")
            else:
                value = type(getattr(group, item.name))(raw)
            setattr(group, item.name, value)
    return config


def load_config_from_json(path: str | Path) -> EngineConfig:
    """Load an engine configuration from a JSON scenario file.

    Parameters
    ----------
    path
        The filesystem path to the JSON document.

    Returns
    -------
    EngineConfig
        Configuration ready to pass to the simulation.

    Raises
    ------
    FileNotFoundError
        Raised when ``path`` does not exist.
    ValueError
        Raised when a coordinate entry is malformed.

    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Scenario JSON not found: {path}")

    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)

    return config_from_dict(data)
