"""
Scoreboard display model.

build_scoreboard() reads a Match and returns a plain Scoreboard snapshot
that a presentation layer can render without touching engine objects.
render_scorecard() turns the same data into a text scorecard.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from tabulate import tabulate


@dataclass
class BatterLine:
    name: str
    runs: int
    balls_faced: int
    fours: int
    sixes: int
    strike_rate: float
    on_strike: bool


@dataclass
class Scoreboard:
    team_name: str
    score: int
    wickets: int
    overs: str
    extras_total: int
    extras: dict
    total: int
    run_rate: float
    target: Optional[int]
    runs_needed: Optional[int]
    status: str
    result: Optional[str] = None
    batters: List[BatterLine] = field(default_factory=list)

    @property
    def score_line(self) -> str:
        return f"{self.score}/{self.wickets}"


def build_scoreboard(match) -> Scoreboard:
    team = match.current_team
    bpo = match.format.balls_per_over

    batters = []
    for slot, player in enumerate((team.striker, team.non_striker)):
        if player is None:
            continue
        batters.append(BatterLine(
            name=player.name,
            runs=player.runs,
            balls_faced=player.balls_faced,
            fours=player.fours,
            sixes=player.sixes,
            strike_rate=round(player.strike_rate, 2),
            on_strike=slot == 0,
        ))

    extras = team.extras.to_dict()
    extras.pop("total")

    return Scoreboard(
        team_name=team.name,
        score=team.score,
        wickets=team.wickets,
        overs=team.overs_display,
        extras_total=team.extras.total,
        extras=extras,
        total=match.team_total(team),
        run_rate=round(team.run_rate(bpo), 2),
        target=match.target,
        runs_needed=match.runs_needed(team),
        status=match.status.value,
        result=match.result(),
        batters=batters,
    )


def render_scorecard(match) -> str:
    """Text scorecard for the selected team: summary line plus a grid table."""
    board = build_scoreboard(match)
    team = match.current_team

    lines = [f"{board.team_name}  {board.score_line}  ({board.overs} ov, RR {board.run_rate:.2f})"]
    e = board.extras
    lines.append(
        f"Extras: {board.extras_total} "
        f"(w {e['wides']}, nb {e['no_balls']}, b {e['byes']}, lb {e['leg_byes']})"
    )
    if board.target is not None:
        target_line = f"Target: {board.target}"
        if board.runs_needed is not None:
            target_line += f"  (need {board.runs_needed})"
        lines.append(target_line)
    if board.result:
        lines.append(board.result)

    headers = ["Batter", "R", "B", "4s", "6s", "SR", ""]
    rows = []
    striker_id = team.batting[0]
    for p in team.players:
        status = ""
        if p.is_batting:
            status = "*" if p.id == striker_id else "batting"
        rows.append([p.name, p.runs, p.balls_faced, p.fours, p.sixes, f"{p.strike_rate:.2f}", status])

    if not rows:
        rows.append(["No players added", "-", "-", "-", "-", "-", ""])

    lines.append(tabulate(rows, headers=headers, tablefmt="grid"))
    return "\n".join(lines)
