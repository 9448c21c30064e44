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
"""Run a short headless goalie simulation with a fixed timestep."""
from pathlib import Path
from typing import Optional

from netminder.engine.simulation import GoalieSimulation
from netminder.main import load_config, print_summary


def run_short_simulation(
    duration_seconds: float = 5.0,
    timestep: float = 0.1,
    scenario: Optional[str] = None,
    variant: str = "redirect",
) -> None:
    """Run the goalie loop without sleeping, using a fixed step for reproducibility.

    Parameters
    ----------
    duration_seconds : float
        How long to simulate (default 5 seconds).
    timestep : float
        Tick length in seconds (default 0.1, same as the real-time loop).
    scenario : str | None
        Optional JSON scenario file; defaults to ``data/scenario.json`` when present.
    variant : str
        ``"redirect"`` or ``"rendezvous"``.
    """
    if scenario is None:
        default = Path(__file__).parent.parent / "data" / "scenario.json"
        scenario = str(default) if default.exists() else None
    sim = GoalieSimulation(load_config(scenario), variant=variant)

    num_steps = int(duration_seconds / timestep)
    for _ in range(num_steps):
        sim._update(timestep)

    sim.stop()
    print(f"Done running {duration_seconds}s simulation ({num_steps} steps)")
    print(f"Log written to {sim.debugger.log_path}")
    print_summary(sim)


if __name__ == "__main__":
    run_short_simulation(10.0)
