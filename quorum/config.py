"""
Configuration models. Loaded from config.yaml, validated via Pydantic.
Enum values are the strings used in config files and results.
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator


class Faction(str, Enum):
    LOYALIST = "loyalist"
    TRAITOR = "traitor"


class ActorStatus(str, Enum):
    ACTIVE = "active"
    REMOVED = "removed"


class EndCondition(str, Enum):
    FIRST_TRAITOR_REMOVED = "first_traitor_removed"
    ALL_ONE_TYPE = "all_one_type"


class Outcome(str, Enum):
    TRAITOR_REMOVED = "traitor_removed"
    NO_LOYALISTS = "no_loyalists"
    ALL_LOYALISTS = "all_loyalists"
    ALL_TRAITORS = "all_traitors"


class VotingStrategy(str, Enum):
    RANDOM = "random"
    FIXATE = "fixate"


class SimulationType(str, Enum):
    RANDOM = "random"
    INFLUENCE = "influence"


class SimulationConfig(BaseModel):
    loyalists: int = 16
    traitors: int = 4
    iterations: int = 1000
    batch_size: int = 100     # games per chunk between progress callbacks
    end_condition: EndCondition = EndCondition.FIRST_TRAITOR_REMOVED
    voting_strategy: VotingStrategy = VotingStrategy.RANDOM
    simulation_type: SimulationType = SimulationType.RANDOM
    seed: int | None = None

    @field_validator("loyalists", "traitors")
    @classmethod
    def at_least_one_actor(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must have at least 1 of each faction, got {v}")
        return v

    @field_validator("iterations", "batch_size")
    @classmethod
    def positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be at least 1, got {v}")
        return v


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


def load_simulation_config(path: Path | str | None = None) -> SimulationConfig:
    """Load and validate SimulationConfig from a YAML file."""
    if path is None:
        path = _PROJECT_ROOT / "config.yaml"
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return SimulationConfig(**raw)
