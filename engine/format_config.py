"""
engine/format_config.py
=======================

Single source of truth for the format-specific scoring parameters.

Every engine component that needs an over length, a wicket cap or an
innings length reads it from a FormatConfig instance rather than
hardcoding 6 / 10.  Adding a new format (e.g. T10, The Hundred) requires
only a new entry in FORMAT_REGISTRY.

Usage
-----
    from engine.format_config import get_format

    fmt = get_format(config["scoring"].get("format"))
    fmt.balls_per_over    # 6
    fmt.max_wickets       # 10
    fmt.overs             # None (open-ended), 20 or 50
    fmt.is_innings_over(wickets, total_balls)
"""

from dataclasses import dataclass
from typing import Dict, Optional


DEFAULT_FORMAT = "Open"


# ---------------------------------------------------------------------------
# FormatConfig
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FormatConfig:
    """
    Complete parameterisation of a scoring format.

    Attributes
    ----------
    name                      : canonical format name ("Open", "T20", "ListA")
    balls_per_over            : legal deliveries per over
    max_wickets               : wickets that end an innings (all out)
    overs                     : overs per innings, or None for no limit
    history_limit             : undo depth kept by a Match
    extras_count_toward_total : whether extras are added to the team total
                                used for the target chase
    valid_runs                : run values accepted off the bat
    """
    name: str
    balls_per_over: int = 6
    max_wickets: int = 10
    overs: Optional[int] = None
    history_limit: int = 50
    extras_count_toward_total: bool = False
    valid_runs: tuple = (0, 1, 2, 3, 4, 6)

    def __post_init__(self):
        if self.balls_per_over <= 0:
            raise ValueError("balls_per_over must be positive.")
        if self.max_wickets <= 0:
            raise ValueError("max_wickets must be positive.")
        if self.overs is not None and self.overs <= 0:
            raise ValueError("overs must be positive or None.")
        if self.history_limit <= 0:
            raise ValueError("history_limit must be positive.")

    # ------------------------------------------------------------------ #
    # Innings helpers                                                      #
    # ------------------------------------------------------------------ #

    @property
    def max_balls(self) -> Optional[int]:
        if self.overs is None:
            return None
        return self.overs * self.balls_per_over

    def is_innings_over(self, wickets: int, total_balls: int) -> bool:
        """True once the side is all out or the overs allocation is used."""
        if wickets >= self.max_wickets:
            return True
        return self.max_balls is not None and total_balls >= self.max_balls

    def with_overrides(self, **overrides) -> "FormatConfig":
        """Return a copy with the given fields replaced (e.g. from config.yaml)."""
        values = {
            "name": self.name,
            "balls_per_over": self.balls_per_over,
            "max_wickets": self.max_wickets,
            "overs": self.overs,
            "history_limit": self.history_limit,
            "extras_count_toward_total": self.extras_count_toward_total,
            "valid_runs": self.valid_runs,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return FormatConfig(**values)


# ---------------------------------------------------------------------------
# Public registry: look up by format string
# ---------------------------------------------------------------------------

FORMAT_REGISTRY: Dict[str, FormatConfig] = {
    # Club/live scoring with no overs cap, as kept on a scoring app.
    "Open":  FormatConfig(name="Open"),
    "T20":   FormatConfig(name="T20", overs=20, extras_count_toward_total=True),
    "ListA": FormatConfig(name="ListA", overs=50, extras_count_toward_total=True),
}


def get_format(match_format: Optional[str]) -> FormatConfig:
    """
    Return the FormatConfig for the given format string.
    Defaults to Open for None or unrecognised values.
    """
    return FORMAT_REGISTRY.get(match_format or DEFAULT_FORMAT, FORMAT_REGISTRY[DEFAULT_FORMAT])
