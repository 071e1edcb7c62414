import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from engine.format_config import FormatConfig, get_format
from engine.history import ActionHistory, ActionType
from engine.scorecard import Scoreboard, build_scoreboard
from engine.team import ExtraType, Team
from utils.helpers import load_config, setup_logging

logger = logging.getLogger(__name__)

DEFAULT_TEAM_NAMES = ["Team A", "Team B"]


class MatchStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    INNINGS_COMPLETE = "innings_complete"   # first innings done, chase under way
    MATCH_COMPLETE = "match_complete"


@dataclass
class ActionResult:
    """Outcome of a Match operation. Truthy when the operation was applied."""
    ok: bool
    action: ActionType
    reason: str = ""
    detail: Dict[str, Any] = field(default_factory=dict)

    def __bool__(self):
        return self.ok


class Match:
    """
    Live scoring state for one match.

    Holds the teams, which one is selected on the scoring screen, an
    optional target and the innings/match status.  Every mutating method
    returns an ActionResult; rejected operations leave the state untouched.
    Applied operations are recorded in a bounded history so they can be
    undone.
    """

    def __init__(self, team_names=None, fmt: Optional[FormatConfig] = None, target: Optional[int] = None):
        names = list(team_names) if team_names is not None else list(DEFAULT_TEAM_NAMES)
        if not names or any(not str(n).strip() for n in names):
            raise ValueError("A match needs at least one team, each with a name.")

        self.format = fmt or get_format(None)
        self.teams: List[Team] = [Team(str(n)) for n in names]
        self.current_team_index = 0
        self.target = target
        self.target_source: Optional[str] = None   # team id whose innings set the target
        self.completed_innings: List[str] = []
        self.status = MatchStatus.IN_PROGRESS
        self.history = ActionHistory(self.format.history_limit)

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "Match":
        """Build a match from the ``scoring`` section of config.yaml."""
        if config is None:
            config = load_config()
        scoring = (config or {}).get("scoring") or {}
        fmt = get_format(scoring.get("format")).with_overrides(
            history_limit=scoring.get("history_limit"),
        )
        match = cls(team_names=scoring.get("default_teams") or DEFAULT_TEAM_NAMES, fmt=fmt)
        logger.info(f"Match created: format={fmt.name}, teams={[t.name for t in match.teams]}")
        return match

    # ------------------------------------------------------------------ #
    # Lookups                                                              #
    # ------------------------------------------------------------------ #

    @property
    def current_team(self) -> Team:
        return self.teams[self.current_team_index]

    def _team(self, team_index: Optional[int]) -> Optional[Team]:
        if team_index is None:
            return self.current_team
        if not isinstance(team_index, int) or not 0 <= team_index < len(self.teams):
            return None
        return self.teams[team_index]

    def _team_by_id(self, team_id: str) -> Optional[Team]:
        for t in self.teams:
            if t.id == team_id:
                return t
        return None

    def team_total(self, team: Team) -> int:
        if self.format.extras_count_toward_total:
            return team.score + team.extras.total
        return team.score

    def is_chasing(self, team: Team) -> bool:
        """True once another side has completed its innings and a target stands."""
        if self.target is None or team.innings_complete:
            return False
        return any(tid != team.id for tid in self.completed_innings)

    def runs_needed(self, team: Optional[Team] = None) -> Optional[int]:
        team = team or self.current_team
        if not self.is_chasing(team):
            return None
        return max(self.target - self.team_total(team) + 1, 0)

    # ------------------------------------------------------------------ #
    # Internal helpers                                                     #
    # ------------------------------------------------------------------ #

    def _fail(self, action: ActionType, reason: str) -> ActionResult:
        logger.warning(f"[{action.value}] rejected: {reason}")
        return ActionResult(False, action, reason)

    def _record(self, action: ActionType, **detail) -> None:
        self.history.push(action, self.to_dict(), **detail)

    def _scoring_blocked(self, team: Team) -> Optional[str]:
        if self.status == MatchStatus.MATCH_COMPLETE:
            return "match is complete"
        if team.innings_complete:
            return f"{team.name} innings is complete"
        return None

    def _after_delivery(self, team: Team) -> None:
        bpo = self.format.balls_per_over
        if self.format.is_innings_over(team.wickets, team.total_balls(bpo)):
            self._complete_innings(team)
        else:
            self._check_chase(team)

    def _check_chase(self, team: Team) -> None:
        if self.is_chasing(team) and self.team_total(team) > self.target:
            self._complete_innings(team)

    def _complete_innings(self, team: Team) -> None:
        team.innings_complete = True
        if team.id not in self.completed_innings:
            self.completed_innings.append(team.id)
        logger.info(
            f"Innings complete: {team.name} {team.score}/{team.wickets} "
            f"({team.overs_display} overs)"
        )
        # The first innings total replaces any target typed in beforehand.
        if len(self.completed_innings) == 1:
            if self.target is not None and self.target != self.team_total(team):
                logger.info(f"Manual target {self.target} replaced by first innings total")
            self.target = self.team_total(team)
            self.target_source = team.id
            logger.info(f"Target set from first innings: {self.target}")
        self._update_status()

    def _update_status(self) -> None:
        completed = len(self.completed_innings)
        if completed >= 2:
            status = MatchStatus.MATCH_COMPLETE
        elif completed == 1:
            status = MatchStatus.INNINGS_COMPLETE
        else:
            status = MatchStatus.IN_PROGRESS
        if status != self.status:
            logger.info(f"Match status: {self.status.value} -> {status.value}")
            self.status = status
            if status == MatchStatus.MATCH_COMPLETE:
                logger.info(f"Result: {self.result()}")

    def _forget_innings(self, team_id: str) -> None:
        if team_id in self.completed_innings:
            self.completed_innings.remove(team_id)
        if self.target_source == team_id:
            self.target = None
            self.target_source = None

    # ------------------------------------------------------------------ #
    # Scoring                                                              #
    # ------------------------------------------------------------------ #

    def add_runs(self, run: int) -> ActionResult:
        action = ActionType.RUNS
        if isinstance(run, bool) or not isinstance(run, int) or run not in self.format.valid_runs:
            return self._fail(action, f"invalid run value {run!r}; expected one of {self.format.valid_runs}")

        team = self.current_team
        blocked = self._scoring_blocked(team)
        if blocked:
            return self._fail(action, blocked)

        self._record(action, runs=run)
        team.score += run

        batter = team.facing_batter
        if batter is not None:
            batter.record_ball(run)
        else:
            logger.debug(f"{team.name}: no batter at the crease, {run} run(s) not credited to a player")

        over_done = team.deliver_ball(self.format.balls_per_over)
        if run % 2 == 1:
            team.swap_strike()
        if over_done:
            team.swap_strike()
            logger.debug(f"End of over {team.overs}: {team.name} {team.score}/{team.wickets}")

        self._after_delivery(team)
        return ActionResult(True, action, detail={"runs": run})

    def add_wicket(self) -> ActionResult:
        action = ActionType.WICKET
        team = self.current_team
        if team.wickets >= self.format.max_wickets:
            return self._fail(action, f"{team.name} already has {team.wickets} wickets down")
        blocked = self._scoring_blocked(team)
        if blocked:
            return self._fail(action, blocked)

        self._record(action)
        team.wickets += 1

        batter = team.facing_batter
        if batter is not None:
            batter.balls_faced += 1
            team.retire_batter(batter)
            logger.debug(f"Wicket: {batter.name} out for {batter.runs}({batter.balls_faced})")

        if team.deliver_ball(self.format.balls_per_over):
            team.swap_strike()

        self._after_delivery(team)
        return ActionResult(True, action, detail={"batter": batter.name if batter else None})

    def add_extras(self, kind, delta: int = 1) -> ActionResult:
        action = ActionType.EXTRAS
        try:
            kind = ExtraType(kind)
        except ValueError:
            return self._fail(action, f"unknown extras kind {kind!r}")
        if isinstance(delta, bool) or not isinstance(delta, int) or delta == 0:
            return self._fail(action, f"invalid extras delta {delta!r}")

        team = self.current_team
        blocked = self._scoring_blocked(team)
        if blocked:
            return self._fail(action, blocked)
        if team.extras.get(kind) + delta < 0:
            return self._fail(action, f"{kind.value} cannot go below zero")

        self._record(action, kind=kind.value, delta=delta)
        team.extras.adjust(kind, delta)
        self._check_chase(team)
        return ActionResult(True, action, detail={"kind": kind.value, "delta": delta})

    def reset_score(self) -> ActionResult:
        action = ActionType.RESET
        team = self.current_team
        self._record(action)
        team.reset()
        self._forget_innings(team.id)
        self._update_status()
        logger.info(f"Score reset for {team.name}")
        return ActionResult(True, action)

    # ------------------------------------------------------------------ #
    # Batting pair                                                         #
    # ------------------------------------------------------------------ #

    def set_batters(self, striker_index: int, non_striker_index: Optional[int] = None,
                    team_index: Optional[int] = None) -> ActionResult:
        action = ActionType.SET_BATTERS
        team = self._team(team_index)
        if team is None:
            return self._fail(action, f"no team at index {team_index!r}")
        n = len(team.players)
        if not isinstance(striker_index, int) or not 0 <= striker_index < n:
            return self._fail(action, f"no player at index {striker_index!r}")
        if non_striker_index is not None:
            if not isinstance(non_striker_index, int) or not 0 <= non_striker_index < n:
                return self._fail(action, f"no player at index {non_striker_index!r}")
            if non_striker_index == striker_index:
                return self._fail(action, "striker and non-striker must be different players")

        self._record(action, striker=striker_index, non_striker=non_striker_index)
        striker = team.players[striker_index]
        non_striker = team.players[non_striker_index] if non_striker_index is not None else None
        team.set_batters(striker, non_striker)
        return ActionResult(True, action)

    def select_next_batter(self, player_index: int, team_index: Optional[int] = None) -> ActionResult:
        action = ActionType.NEXT_BATTER
        team = self._team(team_index)
        if team is None:
            return self._fail(action, f"no team at index {team_index!r}")
        if not isinstance(player_index, int) or not 0 <= player_index < len(team.players):
            return self._fail(action, f"no player at index {player_index!r}")
        player = team.players[player_index]
        if player.is_batting:
            return self._fail(action, f"{player.name} is already batting")
        if None not in team.batting:
            return self._fail(action, "both batting positions are filled")

        self._record(action, player=player_index)
        team.fill_vacancy(player)
        return ActionResult(True, action, detail={"batter": player.name})

    def swap_strike(self, team_index: Optional[int] = None) -> ActionResult:
        action = ActionType.SWAP_STRIKE
        team = self._team(team_index)
        if team is None:
            return self._fail(action, f"no team at index {team_index!r}")
        self._record(action)
        team.swap_strike()
        return ActionResult(True, action)

    # ------------------------------------------------------------------ #
    # Teams and players                                                    #
    # ------------------------------------------------------------------ #

    def select_team(self, index: int) -> ActionResult:
        action = ActionType.SELECT_TEAM
        if index is None or self._team(index) is None:
            return self._fail(action, f"no team at index {index!r}")
        self.current_team_index = index
        return ActionResult(True, action)

    def add_player(self, name: str, team_index: Optional[int] = None) -> ActionResult:
        action = ActionType.ADD_PLAYER
        team = self._team(team_index)
        if team is None:
            return self._fail(action, f"no team at index {team_index!r}")
        if not isinstance(name, str) or not name.strip():
            return self._fail(action, "player name is empty")

        self._record(action, name=name)
        player = team.add_player(name)
        return ActionResult(True, action, detail={"player_id": player.id})

    def remove_player(self, index: int, team_index: Optional[int] = None) -> ActionResult:
        action = ActionType.REMOVE_PLAYER
        team = self._team(team_index)
        if team is None:
            return self._fail(action, f"no team at index {team_index!r}")
        if not isinstance(index, int) or not 0 <= index < len(team.players):
            return self._fail(action, f"no player at index {index!r}")

        self._record(action, index=index)
        removed = team.remove_player(index)
        return ActionResult(True, action, detail={"name": removed.name})

    def add_team(self, name: str) -> ActionResult:
        action = ActionType.ADD_TEAM
        if not isinstance(name, str) or not name.strip():
            return self._fail(action, "team name is empty")

        self._record(action, name=name)
        team = Team(name)
        self.teams.append(team)
        return ActionResult(True, action, detail={"team_id": team.id})

    def remove_team(self, index: int) -> ActionResult:
        action = ActionType.REMOVE_TEAM
        if index is None or self._team(index) is None:
            return self._fail(action, f"no team at index {index!r}")
        if len(self.teams) == 1:
            return self._fail(action, "cannot remove the only team")

        self._record(action, index=index)
        removed = self.teams.pop(index)
        if index < self.current_team_index:
            self.current_team_index -= 1
        self.current_team_index = min(self.current_team_index, len(self.teams) - 1)
        self._forget_innings(removed.id)
        self._update_status()
        return ActionResult(True, action, detail={"name": removed.name})

    # ------------------------------------------------------------------ #
    # Target and undo                                                      #
    # ------------------------------------------------------------------ #

    def set_target(self, score: Optional[int]) -> ActionResult:
        action = ActionType.SET_TARGET
        if score is not None and (isinstance(score, bool) or not isinstance(score, int) or score < 0):
            return self._fail(action, f"invalid target {score!r}")
        if self.status == MatchStatus.MATCH_COMPLETE:
            return self._fail(action, "match is complete")

        self._record(action, target=score)
        self.target = score
        self.target_source = None
        for team in self.teams:
            if not team.innings_complete:
                self._check_chase(team)
        return ActionResult(True, action, detail={"target": score})

    def undo_last_action(self) -> ActionResult:
        action = ActionType.UNDO
        entry = self.history.pop()
        if entry is None:
            return self._fail(action, "nothing to undo")
        self._restore(entry.snapshot)
        logger.info(f"Undid {entry.action.value}")
        return ActionResult(True, action, detail={"undone": entry.action})

    # ------------------------------------------------------------------ #
    # Result and display                                                   #
    # ------------------------------------------------------------------ #

    def result(self) -> Optional[str]:
        if self.status != MatchStatus.MATCH_COMPLETE:
            return None
        first = self._team_by_id(self.completed_innings[0])
        second = self._team_by_id(self.completed_innings[1])
        target = self.target if self.target is not None else self.team_total(first)
        chased = self.team_total(second)
        if chased > target:
            margin = self.format.max_wickets - second.wickets
            return f"{second.name} won by {margin} wicket{'s' if margin != 1 else ''}"
        if chased == target:
            return "Match tied"
        margin = target - chased
        return f"{first.name} won by {margin} run{'s' if margin != 1 else ''}"

    def scoreboard(self) -> Scoreboard:
        return build_scoreboard(self)

    # ------------------------------------------------------------------ #
    # Snapshots                                                            #
    # ------------------------------------------------------------------ #

    def to_dict(self) -> Dict[str, Any]:
        return {
            "format": self.format.name,
            "teams": [t.to_dict() for t in self.teams],
            "current_team_index": self.current_team_index,
            "target": self.target,
            "target_source": self.target_source,
            "completed_innings": list(self.completed_innings),
            "status": self.status.value,
        }

    def _restore(self, snapshot: Dict[str, Any]) -> None:
        self.teams = [Team.from_dict(d) for d in snapshot["teams"]]
        self.current_team_index = snapshot["current_team_index"]
        self.target = snapshot["target"]
        self.target_source = snapshot["target_source"]
        self.completed_innings = list(snapshot["completed_innings"])
        self.status = MatchStatus(snapshot["status"])

    def __repr__(self):
        return (
            f"Match(format={self.format.name!r}, teams={[t.name for t in self.teams]}, "
            f"current={self.current_team.name!r}, status={self.status.value})"
        )


def start_match(config_path: Optional[str] = None) -> Match:
    """Load config.yaml, configure logging from it and return a fresh Match."""
    config = load_config(config_path)
    setup_logging(config)
    return Match.from_config(config)
