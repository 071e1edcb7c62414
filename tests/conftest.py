"""
Pytest fixtures for the live scoring engine.
Provides fresh matches, matches with a batting line-up, and format helpers.
"""

import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from engine.format_config import FormatConfig, get_format
from engine.match import Match


# ==================== Match Fixtures ====================

@pytest.fixture
def match():
    """Fresh open-ended match with the two default teams and no players."""
    return Match()


@pytest.fixture
def lineup_match():
    """Match where Team A has four players and the first two are batting."""
    m = Match()
    for name in ("Opener One", "Opener Two", "Number Three", "Number Four"):
        m.add_player(name)
    m.set_batters(0, 1)
    m.history.clear()
    return m


@pytest.fixture
def t20_match():
    return Match(fmt=get_format("T20"))


@pytest.fixture
def short_format():
    """Two-over, two-wicket format so innings complete quickly in tests."""
    return FormatConfig(name="Short", overs=2, max_wickets=2, history_limit=10)


# ==================== Helpers ====================

def play_balls(m, runs_list):
    for r in runs_list:
        result = m.add_runs(r)
        assert result.ok, result.reason
