"""Seeding presets for the initial universe."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Scenario:
    key: str
    name: str
    planets: int
    satellites: int
    description: str


SCENARIO_DEFINITIONS: tuple[Scenario, ...] = (
    Scenario(
        key="classic",
        name="Classic",
        planets=3,
        satellites=10,
        description="Three planets sharing ten satellites.",
    ),
    Scenario(
        key="lonely",
        name="Lonely",
        planets=1,
        satellites=5,
        description="A single planet with a small cluster.",
    ),
    Scenario(
        key="binary",
        name="Binary",
        planets=2,
        satellites=20,
        description="Two planets competing for twenty satellites.",
    ),
    Scenario(
        key="crowded",
        name="Crowded",
        planets=8,
        satellites=40,
        description="Many planets, lots of satellite stealing.",
    ),
)

SCENARIOS: dict[str, Scenario] = {scenario.key: scenario for scenario in SCENARIO_DEFINITIONS}
SCENARIO_DISPLAY_ORDER: list[str] = [scenario.key for scenario in SCENARIO_DEFINITIONS]
DEFAULT_SCENARIO_KEY = SCENARIO_DISPLAY_ORDER[0]


__all__ = [
    "DEFAULT_SCENARIO_KEY",
    "SCENARIO_DEFINITIONS",
    "SCENARIO_DISPLAY_ORDER",
    "SCENARIOS",
    "Scenario",
]
