"""
player.py

Defines the Player class, representing a batter on a scoring sheet with the
per-innings counters the live scorer keeps: runs, balls faced, boundaries and
whether the player is currently at the crease.

Names must be non-empty. Counters are non-negative integers. This module
provides methods to serialize to/from dictionaries so that a Match can take
snapshots for undo and hand plain data to a presentation layer.
"""

import uuid
from typing import Dict, Any


class Player:
    """
    Represents a single player on a team's scoring sheet.

    Attributes:
        id (str): Stable identifier (uuid4 hex), used by the team's batting pair.
        name (str): Display name of the player.
        runs (int): Runs scored off the bat this innings.
        balls_faced (int): Legal deliveries faced this innings.
        fours (int): Boundaries worth four.
        sixes (int): Boundaries worth six.
        is_batting (bool): True while the player is one of the batting pair.
    """

    def __init__(
        self,
        name: str,
        runs: int = 0,
        balls_faced: int = 0,
        fours: int = 0,
        sixes: int = 0,
        is_batting: bool = False,
        player_id: str = None,
    ) -> None:
        self.name = name.strip()
        if not self.name:
            raise ValueError("Player name must not be empty.")

        for value, label in zip(
            (runs, balls_faced, fours, sixes),
            ("runs", "balls_faced", "fours", "sixes"),
        ):
            if not isinstance(value, int):
                raise TypeError(f"{label} must be an integer.")
            if value < 0:
                raise ValueError(f"{label} must not be negative.")

        self.id = player_id or uuid.uuid4().hex
        self.runs = runs
        self.balls_faced = balls_faced
        self.fours = fours
        self.sixes = sixes
        self.is_batting = bool(is_batting)

    @property
    def strike_rate(self) -> float:
        if self.balls_faced == 0:
            return 0.0
        return self.runs * 100.0 / self.balls_faced

    def record_ball(self, runs: int) -> None:
        """Credit one legal delivery faced and the runs scored off it."""
        self.runs += runs
        self.balls_faced += 1
        if runs == 4:
            self.fours += 1
        elif runs == 6:
            self.sixes += 1

    def reset_stats(self) -> None:
        # Batting status survives a reset; only the counters are zeroed.
        self.runs = 0
        self.balls_faced = 0
        self.fours = 0
        self.sixes = 0

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializes this Player to a dictionary for snapshots or rendering.
        """
        return {
            "id": self.id,
            "name": self.name,
            "runs": self.runs,
            "balls_faced": self.balls_faced,
            "fours": self.fours,
            "sixes": self.sixes,
            "is_batting": self.is_batting,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """
        Constructs a Player instance from a dictionary. Expects the keys
        produced by to_dict(); only "name" is mandatory.
        """
        if "name" not in data:
            raise KeyError("Missing keys for Player.from_dict: {'name'}")

        return cls(
            name=data["name"],
            runs=int(data.get("runs", 0)),
            balls_faced=int(data.get("balls_faced", 0)),
            fours=int(data.get("fours", 0)),
            sixes=int(data.get("sixes", 0)),
            is_batting=bool(data.get("is_batting", False)),
            player_id=data.get("id"),
        )

    def __repr__(self) -> str:
        return (
            f"Player(name={self.name!r}, runs={self.runs}, "
            f"balls_faced={self.balls_faced}, fours={self.fours}, "
            f"sixes={self.sixes}, is_batting={self.is_batting})"
        )
