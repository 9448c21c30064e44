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
"""Structured logging utilities used to trace goalie decisions."""
from __future__ import annotations

import time
from collections import deque
from pathlib import Path
from threading import Lock
from typing import TYPE_CHECKING, Deque, List, Optional, TextIO, Tuple

if TYPE_CHECKING:
    from netminder.engine.goalkeeper import TickDecision


def _fmt_point(point: Optional[Tuple[float, float]]) -> str:
    """Format an optional coordinate pair for a log line.

    Parameters
    ----------
    point : tuple[float, float] | None
        Coordinates to format.

    Returns
    -------
    str
        ``"(x, y)"`` with two decimals, or ``"-"`` when missing.
    """
    if point is None:
        return "-"
    return f"({point[0]:.2f}, {point[1]:.2f})"


class DecisionDebugger:
    """Helper object that streams structured goalie telemetry to disk.

    Parameters
    ----------
    output_dir : str | Path, default="debug_logs"
        Directory where new session logs are created; created automatically when missing.
    """

    def __init__(self, output_dir: str | Path = "debug_logs") -> None:
        """Initialise the debugger and start the first logging session.

        Parameters
        ----------
        output_dir : str | Path
            Filesystem directory where log files are created or appended.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.session_start = time.strftime("%Y%m%d_%H%M%S")
        self._lock = Lock()
        self._line_number = 1
        self._recent_events: Deque[Tuple[int, str]] = deque(maxlen=200)
        self.start_new_session()

    def start_new_session(self) -> None:
        """Start a new debug logging session."""
        if self.log_file:
            self.log_file.close()

        self.log_path = self.output_dir / f"goalie_debug_{self.session_start}.txt"
        self.log_file = open(self.log_path, "w", encoding="utf-8")
        self.log_file.write(f"=== Goalie Debug Session: {time.strftime('%Y-%m-%d %H:%M:%S')} ===\n\n")

    def log_ball_state(
        self,
        sim_time: float,
        position: Tuple[float, float],
        velocity: Tuple[float, float],
        forecast: Optional[Tuple[float, float]] = None,
    ) -> None:
        """Log the tracked ball state.

        Parameters
        ----------
        sim_time : float
            Elapsed simulation time in seconds.
        position : tuple[float, float]
            Observed ball coordinates.
        velocity : tuple[float, float]
            Estimated ball velocity.
        forecast : tuple[float, float] | None
            Forecast ball position, when one was computed.
        """
        forecast_str = f" | Forecast: {_fmt_point(forecast)}" if forecast else ""
        self._write_log(
            "BALL_STATE",
            f"Time: {sim_time:.2f}s | Pos: {_fmt_point(position)} | Vel: {_fmt_point(velocity)}{forecast_str}",
        )

    def log_agent_state(
        self,
        sim_time: float,
        label: str,
        position: Tuple[float, float],
        velocity: Optional[Tuple[float, float]] = None,
        speed: Optional[float] = None,
    ) -> None:
        """Log the state of the goalie or the opponent.

        Parameters
        ----------
        sim_time : float
            Elapsed simulation time in seconds.
        label : str
            Agent name such as ``"goalie"`` or ``"opponent"``.
        position : tuple[float, float]
            Agent coordinates.
        velocity : tuple[float, float] | None
            Observed velocity, when known.
        speed : float | None
            Scalar speed, when known.
        """
        velocity_str = f" | Vel: {_fmt_point(velocity)}" if velocity is not None else ""
        speed_str = f" | Speed: {speed:.2f}" if speed is not None else ""
        self._write_log(
            "AGENT_STATE",
            f"Time: {sim_time:.2f}s | {label} | Pos: {_fmt_point(position)}{velocity_str}{speed_str}",
        )

    def log_decision(self, sim_time: float, decision: "TickDecision") -> None:
        """Log a tick decision with its intermediate values.

        Parameters
        ----------
        sim_time : float
            Elapsed simulation time in seconds.
        decision : TickDecision
            Outcome returned by the decision engine.
        """
        parts = [f"Time: {sim_time:.2f}s", f"State: {decision.state}"]
        if decision.goalie_time is not None:
            parts.append(f"Goalie: {decision.goalie_time:.2f}s")
        if decision.enemy_time is not None:
            parts.append(f"Enemy: {decision.enemy_time:.2f}s")
        if decision.path_blocked is not None:
            parts.append(f"Blocked: {decision.path_blocked}")
        target = decision.target
        if target is not None:
            parts.append(f"Target: {_fmt_point(target.as_tuple())}")
        if decision.reason:
            parts.append(f"Reason: {decision.reason}")
        self._write_log("DECISION", " | ".join(parts))

    def log_tick_event(self, sim_time: float, event_type: str, description: str) -> None:
        """Log a notable tick event (intercept, safe mode, skipped tick).

        Parameters
        ----------
        sim_time : float
            Elapsed simulation time in seconds.
        event_type : str
            Short label identifying the event category.
        description : str
            Human-readable summary of the event.
        """
        self._write_log("TICK_EVENT", f"Time: {sim_time:.2f}s | Event: {event_type} | Details: {description}")

    def log_error(self, error_type: str, description: str) -> None:
        """Log an error or warning.

        Parameters
        ----------
        error_type : str
            Label describing the error classification.
        description : str
            Human-readable explanation of the issue.
        """
        self._write_log("ERROR", f"Type: {error_type} | Details: {description}")

    def _write_log(self, event_type: str, details: str) -> None:
        """Write a log entry to the file.

        Parameters
        ----------
        event_type : str
            Category label for the log entry.
        details : str
            Formatted message body to persist.
        """
        timestamp = time.strftime("%H:%M:%S")
        log_entry = f"[{timestamp}] {event_type}: {details}"

        with self._lock:
            line_no = self._line_number
            self._line_number += 1
            self._recent_events.append((line_no, log_entry))

            if self.log_file:
                self.log_file.write(f"{log_entry}\n")
                self.log_file.flush()

    def get_recent_events(self, limit: int = 20) -> List[str]:
        """Return the latest debug entries with line numbers for live displays.

        Parameters
        ----------
        limit : int
            Maximum number of entries to return.

        Returns
        -------
        List[str]
            Up to ``limit`` most recent log lines with prefixed line numbers.
        """
        with self._lock:
            selected = list(self._recent_events)[-limit:]
        return [f"{line_no:05d} {entry}" for line_no, entry in selected]

    def close(self) -> None:
        """Close the log file."""
        with self._lock:
            if self.log_file:
                self.log_file.close()
                self.log_file = None
