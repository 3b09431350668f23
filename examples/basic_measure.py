#!/usr/bin/env python3
"""
Basic FootprintLib Example

Demonstrates measuring object graphs and writing a custom visitor.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from footprintlib import MeasureConfig, measure
from footprintlib.core import CallbackVisitor, Traversal, explore


@dataclass
class Employee:
    name: str
    salary: float
    manager: Optional['Employee'] = None
    reports: List['Employee'] = field(default_factory=list)


def build_team():
    boss = Employee("Ada", 250_000)
    for name in ("Grace", "Linus", "Guido"):
        report = Employee(name, 120_000, manager=boss)
        boss.reports.append(report)
    return boss


def main():
    team = build_team()

    print("Full footprint:")
    print(f"  {measure(team)}")

    print("\nIgnoring leaves:")
    print(f"  {measure(team, config=MeasureConfig.objects_only())}")

    print("\nStopping at the reports list:")
    print(f"  {measure(team, lambda value: value is not team.reports)}")

    # Print every chain reached from the root, one line each
    print("\nChains:")
    seen = set()

    def show(chain):
        print(f"  {chain}")
        if id(chain.value) in seen:
            return Traversal.SKIP
        seen.add(id(chain.value))
        return Traversal.EXPLORE

    explore(team, CallbackVisitor(show))


if __name__ == "__main__":
    main()
