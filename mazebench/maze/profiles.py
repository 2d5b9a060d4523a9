"""Difficulty tiers and the generation parameters behind them.

A profile always carries a ``loop_density`` and at most one secondary knob:

- ``corridor_bias``: probability of continuing in the direction used to enter
  a cell, producing long straight corridors (``corridor`` scheme).
- ``dead_end_fill``: probability of sealing each discovered dead end,
  removing exploration traps (``trap_removal`` scheme).

Both knobs make a maze feel more open, through different mechanics, so a
single profile never mixes them.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Difficulty(str, Enum):
    SIMPLE = "simple"
    NORMAL = "normal"
    COMPLEX = "complex"
    EXTREME = "extreme"


class GenerationScheme(str, Enum):
    CORRIDOR = "corridor"
    TRAP_REMOVAL = "trap_removal"


class DifficultyProfile(BaseModel):
    """Numeric generation parameters for one difficulty tier."""

    model_config = ConfigDict(frozen=True)

    name: str
    loop_density: float = Field(
        0.0, ge=0.0, le=1.0,
        description="Loop-injection attempts per grid cell",
    )
    corridor_bias: float = Field(
        0.0, ge=0.0, le=1.0,
        description="Chance of preferring the incoming carve direction",
    )
    dead_end_fill: float = Field(
        0.0, ge=0.0, le=1.0,
        description="Chance of sealing each dead end found during filling",
    )

    @model_validator(mode="after")
    def _one_secondary_knob(self) -> "DifficultyProfile":
        if self.corridor_bias > 0 and self.dead_end_fill > 0:
            raise ValueError(
                f"Profile '{self.name}' sets both corridor_bias and dead_end_fill; "
                "pick one generation scheme"
            )
        return self

    @property
    def scheme(self) -> GenerationScheme:
        if self.dead_end_fill > 0:
            return GenerationScheme.TRAP_REMOVAL
        return GenerationScheme.CORRIDOR


# Easier tiers get more loops and more forgiving structure. ``extreme`` is a
# perfect maze under both schemes.
CORRIDOR_PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.SIMPLE: DifficultyProfile(name="simple", loop_density=0.02, corridor_bias=0.75),
    Difficulty.NORMAL: DifficultyProfile(name="normal", loop_density=0.01, corridor_bias=0.5),
    Difficulty.COMPLEX: DifficultyProfile(name="complex", loop_density=0.005, corridor_bias=0.25),
    Difficulty.EXTREME: DifficultyProfile(name="extreme"),
}

TRAP_REMOVAL_PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.SIMPLE: DifficultyProfile(name="simple", loop_density=0.02, dead_end_fill=0.65),
    Difficulty.NORMAL: DifficultyProfile(name="normal", loop_density=0.01, dead_end_fill=0.4),
    Difficulty.COMPLEX: DifficultyProfile(name="complex", loop_density=0.005, dead_end_fill=0.15),
    Difficulty.EXTREME: DifficultyProfile(name="extreme"),
}

PROFILE_TABLES: Dict[GenerationScheme, Dict[Difficulty, DifficultyProfile]] = {
    GenerationScheme.CORRIDOR: CORRIDOR_PROFILES,
    GenerationScheme.TRAP_REMOVAL: TRAP_REMOVAL_PROFILES,
}

ProfileLike = Union[DifficultyProfile, Difficulty, str]


def resolve_profile(
    profile: ProfileLike,
    scheme: Union[GenerationScheme, str] = GenerationScheme.CORRIDOR,
) -> DifficultyProfile:
    """Turn a tier name, ``Difficulty`` or explicit profile into a profile.

    Raises:
        ValueError: If the tier or scheme name is unknown.
    """
    if isinstance(profile, DifficultyProfile):
        return profile
    table = PROFILE_TABLES[GenerationScheme(scheme)]
    return table[Difficulty(profile)]
