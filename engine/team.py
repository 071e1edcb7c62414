# ── engine/team.py ──

import uuid
from dataclasses import dataclass, asdict
from enum import Enum

from .player import Player


class ExtraType(str, Enum):
    """
    The four extras counters kept per team. Values match the Extras
    field names so they can be used as keys in to_dict() output.
    """

    WIDE = "wides"
    NO_BALL = "no_balls"
    BYE = "byes"
    LEG_BYE = "leg_byes"


@dataclass
class Extras:
    wides: int = 0
    no_balls: int = 0
    byes: int = 0
    leg_byes: int = 0

    @property
    def total(self):
        return self.wides + self.no_balls + self.byes + self.leg_byes

    def get(self, kind):
        return getattr(self, ExtraType(kind).value)

    def adjust(self, kind, delta):
        """Stepper update of one counter. Returns False (no change) if it would go negative."""
        field_name = ExtraType(kind).value
        new_value = getattr(self, field_name) + delta
        if new_value < 0:
            return False
        setattr(self, field_name, new_value)
        return True

    def to_dict(self):
        d = asdict(self)
        d["total"] = self.total
        return d

    @staticmethod
    def from_dict(data):
        return Extras(
            wides=int(data.get("wides", 0)),
            no_balls=int(data.get("no_balls", 0)),
            byes=int(data.get("byes", 0)),
            leg_byes=int(data.get("leg_byes", 0)),
        )


class Team:
    def __init__(self, name, players=None, team_id=None):
        self.id = team_id or uuid.uuid4().hex
        self.name = name.strip()
        self.players = list(players or [])
        self.score = 0
        self.wickets = 0
        self.overs = 0
        self.balls = 0              # balls in the current over, 0..balls_per_over-1
        self.extras = Extras()
        self.batting = [None, None]  # [striker_id, non_striker_id]
        self.innings_complete = False

    # ------------------------------------------------------------------ #
    # Derived values                                                       #
    # ------------------------------------------------------------------ #

    def total_balls(self, balls_per_over=6):
        return self.overs * balls_per_over + self.balls

    @property
    def overs_display(self):
        return f"{self.overs}.{self.balls}"

    def run_rate(self, balls_per_over=6):
        total = self.total_balls(balls_per_over)
        if total == 0:
            return 0.0
        return self.score * balls_per_over / total

    # ------------------------------------------------------------------ #
    # Deliveries                                                           #
    # ------------------------------------------------------------------ #

    def deliver_ball(self, balls_per_over=6):
        """Count one legal delivery. Returns True when it completed an over."""
        self.balls += 1
        if self.balls == balls_per_over:
            self.balls = 0
            self.overs += 1
            return True
        return False

    # ------------------------------------------------------------------ #
    # Batting pair                                                         #
    # ------------------------------------------------------------------ #

    def find_player(self, player_id):
        if player_id is None:
            return None
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    @property
    def striker(self):
        return self.find_player(self.batting[0])

    @property
    def non_striker(self):
        return self.find_player(self.batting[1])

    @property
    def facing_batter(self):
        # A lone batter left at the non-striker end still faces.
        return self.striker or self.non_striker

    def set_batters(self, striker, non_striker=None):
        self.batting = [striker.id, non_striker.id if non_striker else None]
        self._sync_batting_flags()

    def swap_strike(self):
        self.batting.reverse()

    def retire_batter(self, player):
        """Take player off the field and leave their slot vacant."""
        self.batting = [pid if pid != player.id else None for pid in self.batting]
        self._sync_batting_flags()

    def fill_vacancy(self, player):
        """Put player into the first vacant slot, striker slot first."""
        if None not in self.batting:
            return False
        self.batting[self.batting.index(None)] = player.id
        self._sync_batting_flags()
        return True

    def _sync_batting_flags(self):
        for p in self.players:
            p.is_batting = p.id in self.batting

    # ------------------------------------------------------------------ #
    # Roster                                                               #
    # ------------------------------------------------------------------ #

    def add_player(self, name):
        player = Player(name)
        self.players.append(player)
        return player

    def remove_player(self, index):
        player = self.players.pop(index)
        self.batting = [pid if pid != player.id else None for pid in self.batting]
        return player

    def reset(self):
        self.score = 0
        self.wickets = 0
        self.overs = 0
        self.balls = 0
        self.extras = Extras()
        self.innings_complete = False
        for p in self.players:
            p.reset_stats()

    # ------------------------------------------------------------------ #
    # Serialisation                                                        #
    # ------------------------------------------------------------------ #

    def to_dict(self):
        return {
            "id": self.id,
            "team_name": self.name,
            "players": [p.to_dict() for p in self.players],
            "score": self.score,
            "wickets": self.wickets,
            "overs": self.overs,
            "balls": self.balls,
            "extras": self.extras.to_dict(),
            "batting": list(self.batting),
            "innings_complete": self.innings_complete,
        }

    @staticmethod
    def from_dict(data):
        players = [Player.from_dict(p) for p in data.get("players", [])]
        team = Team(name=data["team_name"], players=players, team_id=data.get("id"))
        team.score = int(data.get("score", 0))
        team.wickets = int(data.get("wickets", 0))
        team.overs = int(data.get("overs", 0))
        team.balls = int(data.get("balls", 0))
        team.extras = Extras.from_dict(data.get("extras", {}))
        team.batting = list(data.get("batting", [None, None]))
        team.innings_complete = bool(data.get("innings_complete", False))
        team._sync_batting_flags()
        return team

    def __repr__(self):
        return (
            f"Team(name={self.name!r}, score={self.score}/{self.wickets}, "
            f"overs={self.overs_display}, players={len(self.players)})"
        )
