import random

import pytest

from engine.history import ActionType
from engine.match import Match
from engine.team import ExtraType
from conftest import play_balls


def test_runs_add_to_score_and_deliver_a_ball(match):
    result = match.add_runs(4)

    assert result.ok
    assert result.action == ActionType.RUNS
    team = match.current_team
    assert team.score == 4
    assert team.balls == 1
    assert team.overs == 0


def test_sixth_ball_rolls_over_into_next_over(match):
    match.add_runs(4)
    play_balls(match, [1] * 5)

    team = match.current_team
    assert team.score == 9
    assert team.balls == 0
    assert team.overs == 1
    assert team.overs_display == "1.0"


@pytest.mark.parametrize("bad", [5, -1, 7, 2.0, "4", True, None])
def test_invalid_run_values_are_rejected(match, bad):
    result = match.add_runs(bad)

    assert not result
    assert "invalid run value" in result.reason
    assert match.current_team.score == 0
    assert match.current_team.balls == 0
    assert len(match.history) == 0


def test_score_is_sum_of_runs_and_ball_invariants_hold(match):
    rng = random.Random(2024)
    runs = [rng.choice([0, 1, 2, 3, 4, 6]) for _ in range(47)]
    delivered = 0

    for r in runs:
        match.add_runs(r)
        delivered += 1
        team = match.current_team
        assert 0 <= team.balls <= 5
        assert team.overs == delivered // 6

    assert match.current_team.score == sum(runs)


def test_runs_credit_striker_and_boundaries(lineup_match):
    opener = lineup_match.current_team.players[0]

    lineup_match.add_runs(4)
    lineup_match.add_runs(6)

    assert opener.runs == 10
    assert opener.balls_faced == 2
    assert opener.fours == 1
    assert opener.sixes == 1
    assert opener.strike_rate == 500.0


def test_odd_runs_rotate_strike(lineup_match):
    team = lineup_match.current_team
    one, two = team.players[0], team.players[1]

    lineup_match.add_runs(1)
    assert team.striker is two
    assert team.non_striker is one

    lineup_match.add_runs(3)
    assert team.striker is one
    assert one.runs == 1
    assert two.runs == 3


def test_end_of_over_rotates_strike(lineup_match):
    team = lineup_match.current_team
    play_balls(lineup_match, [0] * 6)

    assert team.overs == 1
    assert team.striker is team.players[1]


def test_single_off_last_ball_keeps_strike(lineup_match):
    team = lineup_match.current_team
    play_balls(lineup_match, [0] * 5 + [1])

    # Swapped for the single, swapped back for the end of the over.
    assert team.striker is team.players[0]
    assert team.players[0].runs == 1


def test_runs_without_players_still_score(match):
    match.add_runs(2)
    assert match.current_team.score == 2
    assert match.current_team.players == []


def test_wicket_increments_and_delivers_ball(lineup_match):
    team = lineup_match.current_team
    opener = team.players[0]

    result = lineup_match.add_wicket()

    assert result.ok
    assert result.detail["batter"] == "Opener One"
    assert team.wickets == 1
    assert team.balls == 1
    assert opener.is_batting is False
    assert opener.balls_faced == 1
    assert team.batting[0] is None
    assert team.non_striker is team.players[1]


def test_wicket_without_batters_still_counts(match):
    assert match.add_wicket().ok
    assert match.current_team.wickets == 1
    assert match.current_team.balls == 1


def test_ten_wickets_then_capped(match):
    for _ in range(10):
        assert match.add_wicket().ok

    team = match.current_team
    assert team.wickets == 10
    score, overs, balls = team.score, team.overs, team.balls

    result = match.add_wicket()

    assert not result.ok
    assert "10 wickets" in result.reason
    assert team.wickets == 10
    assert (team.score, team.overs, team.balls) == (score, overs, balls)


def test_no_runs_after_innings_is_all_out(match):
    for _ in range(10):
        match.add_wicket()

    result = match.add_runs(4)

    assert not result.ok
    assert "innings is complete" in result.reason
    assert match.current_team.score == 0


def test_lone_batter_at_non_striker_end_faces(lineup_match):
    team = lineup_match.current_team
    lineup_match.add_wicket()

    lineup_match.add_runs(2)

    assert team.players[1].runs == 2
    assert team.players[1].balls_faced == 1


def test_extras_are_tracked_separately_from_score(match):
    assert match.add_extras(ExtraType.WIDE).ok
    assert match.add_extras("no_balls", 2).ok
    assert match.add_extras(ExtraType.BYE, 4).ok
    assert match.add_extras("leg_byes").ok

    team = match.current_team
    assert team.extras.total == 8
    assert team.extras.total == team.extras.wides + team.extras.no_balls + team.extras.byes + team.extras.leg_byes
    assert team.score == 0
    assert team.balls == 0


def test_extras_total_matches_counters_for_random_steps(match):
    rng = random.Random(7)
    for _ in range(60):
        kind = rng.choice(list(ExtraType))
        delta = rng.choice([-1, 1, 2])
        match.add_extras(kind, delta)
        e = match.current_team.extras
        assert min(e.wides, e.no_balls, e.byes, e.leg_byes) >= 0
        assert e.total == e.wides + e.no_balls + e.byes + e.leg_byes


def test_extras_stepper_cannot_go_below_zero(match):
    match.add_extras(ExtraType.WIDE, 1)

    assert match.add_extras(ExtraType.WIDE, -1).ok
    result = match.add_extras(ExtraType.WIDE, -1)

    assert not result.ok
    assert match.current_team.extras.wides == 0


@pytest.mark.parametrize("kind,delta", [("penalty", 1), ("wides", 0), ("wides", 1.5), ("byes", True)])
def test_extras_rejects_bad_input(match, kind, delta):
    assert not match.add_extras(kind, delta).ok
    assert match.current_team.extras.total == 0


def test_extras_count_toward_total_in_t20(t20_match):
    t20_match.add_runs(4)
    t20_match.add_extras(ExtraType.WIDE)

    assert t20_match.current_team.score == 4
    assert t20_match.team_total(t20_match.current_team) == 5


def test_reset_zeroes_team_and_players(lineup_match):
    play_balls(lineup_match, [4, 1, 6, 2, 0, 3, 1])
    lineup_match.add_wicket()
    lineup_match.add_extras(ExtraType.BYE, 2)

    result = lineup_match.reset_score()

    team = lineup_match.current_team
    assert result.ok
    assert (team.score, team.wickets, team.overs, team.balls) == (0, 0, 0, 0)
    assert team.extras.total == 0
    assert all(p.runs == 0 and p.balls_faced == 0 for p in team.players)
    assert len(team.players) == 4


def test_reset_keeps_batting_status(lineup_match):
    lineup_match.add_runs(1)
    before = [p.is_batting for p in lineup_match.current_team.players]

    lineup_match.reset_score()

    assert [p.is_batting for p in lineup_match.current_team.players] == before


def test_reset_is_idempotent(lineup_match):
    play_balls(lineup_match, [4, 4, 1])
    lineup_match.add_wicket()

    lineup_match.reset_score()
    once = lineup_match.current_team.to_dict()
    lineup_match.reset_score()

    assert lineup_match.current_team.to_dict() == once


def test_reset_only_touches_current_team(match):
    match.add_runs(6)
    match.select_team(1)
    match.add_runs(4)

    match.reset_score()

    assert match.teams[0].score == 6
    assert match.teams[1].score == 0


def test_scoring_goes_to_selected_team(match):
    match.add_runs(4)
    assert match.select_team(1).ok
    match.add_runs(2)

    assert match.teams[0].score == 4
    assert match.teams[1].score == 2
    assert match.teams[0].balls == 1


def test_select_team_out_of_range(match):
    result = match.select_team(5)

    assert not result.ok
    assert match.current_team_index == 0
    assert not match.select_team(None).ok


def test_run_rate(match):
    play_balls(match, [6, 6, 0, 0, 0, 0])
    assert match.current_team.run_rate() == 12.0
    assert Match().current_team.run_rate() == 0.0
