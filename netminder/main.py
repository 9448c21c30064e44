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
"""Entry point for manual goalie simulations and the optional visualiser."""
import argparse
import threading
from collections import Counter
from pathlib import Path
from typing import List, Optional

from netminder.engine.config import EngineConfig
from netminder.engine.simulation import GoalieSimulation
from netminder.utils.console import print_decision
from netminder.utils.debug import DecisionDebugger
from netminder.utils.scenario import load_config_from_json


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser for the ``netminder`` command.
    """
    parser = argparse.ArgumentParser(description="Run the goalie decision loop against a scripted ball")
    parser.add_argument("--scenario", type=str, default=None, help="Path to a JSON scenario file")
    parser.add_argument("--ticks", type=int, default=None, help="Stop after this many ticks (0 runs until Ctrl+C)")
    parser.add_argument("--interval", type=float, default=None, help="Seconds between ticks")
    parser.add_argument(
        "--variant",
        choices=("redirect", "rendezvous"),
        default="redirect",
        help="Clear toward goal/teammate, or meet the ball at its forecast position",
    )
    parser.add_argument("--log-dir", type=str, default="debug_logs", help="Directory for debug session logs")
    parser.add_argument("--visualize", action="store_true", help="Open the pygame window")
    parser.add_argument("--quiet", action="store_true", help="Do not print per-tick decisions")
    return parser


def load_config(scenario: Optional[str]) -> EngineConfig:
    """Load the scenario file, falling back to defaults when it cannot be read.

    Parameters
    ----------
    scenario : str | None
        Path to a JSON scenario file, or ``None`` for defaults.

    Returns
    -------
    EngineConfig
        Configuration for the run.
    """
    if scenario is None:
        return EngineConfig()
    try:
        return load_config_from_json(Path(scenario))
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading scenario from {scenario}: {e}")
        print("Falling back to default scenario...")
        return EngineConfig()


def main(argv: Optional[List[str]] = None) -> None:
    """Run a goalie simulation, wiring the loop to console and optional visual outputs.

    Parameters
    ----------
    argv : List[str] | None
        Command-line arguments; defaults to ``sys.argv[1:]``.
    """
    args = build_parser().parse_args(argv)
    config = load_config(args.scenario)
    if args.ticks is not None:
        config.simulation.max_ticks = args.ticks
    if args.interval is not None:
        config.simulation.tick_interval = args.interval

    sim = GoalieSimulation(
        config,
        variant=args.variant,
        debugger=DecisionDebugger(args.log_dir),
        on_decision=None if args.quiet else print_decision,
    )

    if args.visualize:
        from netminder.visualizer.visualizer import pygame, start_visualizer

        if pygame is None:
            print("pygame is not installed; running without the visualizer.")
        else:
            engine_thread: Optional[threading.Thread] = None

            def start_engine() -> threading.Thread:
                nonlocal engine_thread
                if engine_thread is None:
                    engine_thread = threading.Thread(target=sim.start)
                    engine_thread.start()
                return engine_thread

            print("Visualizer started. Press Start in the window to begin the simulation.")
            start_visualizer(sim, start_callback=start_engine)
            if engine_thread is not None:
                engine_thread.join()
            else:
                sim.stop()
            print_summary(sim)
            return

    try:
        sim.start()
    except KeyboardInterrupt:
        print("\nSimulation interrupted.")
        sim.stop()
    print_summary(sim)


def print_summary(sim: GoalieSimulation) -> None:
    """Print final goalie position and tick outcome counts.

    Parameters
    ----------
    sim : GoalieSimulation
        Finished simulation.
    """
    counts = Counter(event.event_type for event in sim.state.events)
    pos = sim.engine.position
    print(f"\nTicks: {sim.state.ticks} | Final goalie position: ({pos.x:.2f}, {pos.y:.2f})")
    for event_type in ("intercept", "safe_mode", "idle", "skipped"):
        print(f"{event_type}: {counts.get(event_type, 0)}")


if __name__ == "__main__":
    main()
