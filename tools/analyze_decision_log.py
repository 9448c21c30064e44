#!/usr/bin/env python3
"""
Summarise goalie debug logs to spot tuning problems.

Usage:
    python tools/analyze_decision_log.py <log_file_path>
"""

import re
import sys
from collections import Counter
from pathlib import Path

DECISION_RE = re.compile(r"DECISION: Time: ([\d.]+)s \| State: (\w+)(.*)$")
EVENT_RE = re.compile(r"TICK_EVENT: Time: ([\d.]+)s \| Event: (\w+) \| Details: (.+)$")


def parse_log_file(log_path):
    """Parse the debug log and extract decisions and tick events."""
    decisions = []
    events = []
    errors = []

    with open(log_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.rstrip("\n")
            match = DECISION_RE.search(line)
            if match:
                time, state, rest = match.groups()
                fields = dict(re.findall(r"\| (\w+): ([^|]+)", rest))
                decisions.append((float(time), state, {k: v.strip() for k, v in fields.items()}))
                continue

            match = EVENT_RE.search(line)
            if match:
                time, event_type, details = match.groups()
                events.append((float(time), event_type, details))
                continue

            if "ERROR:" in line:
                errors.append(line)

    return {"decisions": decisions, "events": events, "errors": errors}


def _seconds(value):
    return float(value.rstrip("s"))


def analyze_decisions(decisions):
    """Report state counts and average arrival times."""
    print("\n=== DECISION ANALYSIS ===")
    print(f"Total decisions: {len(decisions)}")
    if not decisions:
        print("  ⚠️  No decisions logged - was the simulation started?")
        return

    states = Counter(state for _, state, _ in decisions)
    for state, count in states.most_common():
        print(f"  {state}: {count} ({count / len(decisions) * 100:.1f}%)")

    goalie_times = [_seconds(f["Goalie"]) for _, _, f in decisions if "Goalie" in f]
    enemy_times = [_seconds(f["Enemy"]) for _, _, f in decisions if "Enemy" in f]
    if goalie_times:
        print(f"  Average goalie arrival: {sum(goalie_times) / len(goalie_times):.2f}s")
    if enemy_times:
        print(f"  Average enemy arrival: {sum(enemy_times) / len(enemy_times):.2f}s")

    blocked = sum(1 for _, _, f in decisions if f.get("Blocked") == "True")
    checked = sum(1 for _, _, f in decisions if "Blocked" in f)
    if checked:
        print(f"  Lane blocked: {blocked}/{checked} checks")

    if states.get("safe_mode", 0) > len(decisions) * 0.8:
        print("  ⚠️  Goalie almost always retreats - intercept threshold may be too strict")


def analyze_targets(decisions):
    """Report where the goalie cleared the ball."""
    print("\n=== TARGET ANALYSIS ===")
    targets = Counter(f["Target"] for _, state, f in decisions if state == "intercepting" and "Target" in f)
    if not targets:
        print("  No interceptions")
        return
    for target, count in targets.most_common(10):
        print(f"  {target}: {count}")


def main():
    if len(sys.argv) < 2:
        print("Usage: python tools/analyze_decision_log.py <log_file_path>")
        print("\nExample:")
        print("  python tools/analyze_decision_log.py debug_logs/goalie_debug_20251117_222236.txt")
        sys.exit(1)

    log_path = Path(sys.argv[1])

    if not log_path.exists():
        print(f"Error: Log file not found: {log_path}")
        sys.exit(1)

    print(f"Analyzing: {log_path.name}")
    print("=" * 60)

    data = parse_log_file(log_path)

    print("\n=== EVENT SUMMARY ===")
    for event_type, count in Counter(e for _, e, _ in data["events"]).most_common():
        print(f"  {event_type}: {count}")
    if data["errors"]:
        print(f"  errors: {len(data['errors'])}")

    analyze_decisions(data["decisions"])
    analyze_targets(data["decisions"])

    print("\n" + "=" * 60)
    print("Analysis complete!")


if __name__ == "__main__":
    main()
