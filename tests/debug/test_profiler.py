"""
Tests for mnk_engine.debug.profiler

Tests the search profile registry and the profiling utilities.
"""

import pytest

from mnk_engine.debug.profiler import (
    clear_profiles,
    compare_engines,
    get_profiles,
    print_profile_summary,
    profile_search,
    profiled,
)
from mnk_engine.games.mnk import MNKState
from mnk_engine.search.evaluation import terminal_evaluation
from mnk_engine.search.iterative import IterativeDeepening
from mnk_engine.search.minimax import Minimax


@pytest.fixture(autouse=True)
def clean_registry():
    """Every test starts with no profile data."""
    clear_profiles()
    yield
    clear_profiles()


class TestProfiled:
    """profiled / print_profile_summary tests."""

    def test_accumulates_engine_counters(self, tic_tac_toe: MNKState, play):
        """Each block adds one run with the engine's node and cutoff counts."""
        state = play(tic_tac_toe, [(1, 1), (0, 0)])
        engine = Minimax(3, terminal_evaluation)
        expected_nodes = 0
        expected_cutoffs = 0
        for _ in range(2):
            with profiled("ab", engine):
                engine.analyse(state)
            expected_nodes += engine.stats.nodes
            expected_cutoffs += engine.stats.cutoffs

        prof = get_profiles()["ab"]
        assert prof.runs == 2
        assert prof.nodes == expected_nodes
        assert prof.cutoffs == expected_cutoffs
        assert prof.total_ms >= 0.0

    def test_summary(self, tic_tac_toe: MNKState, capsys):
        """The summary lists every label with its node count."""
        engine = Minimax(1, terminal_evaluation)
        with profiled("shallow", engine):
            engine.analyse(tic_tac_toe)
        print_profile_summary()
        out = capsys.readouterr().out
        assert "shallow" in out
        assert "Cutoffs" in out

    def test_empty_summary(self, capsys):
        """No data is reported plainly."""
        print_profile_summary()
        assert "No search profiles" in capsys.readouterr().out


class TestProfileSearch:
    """profile_search tests."""

    def test_report(self, tic_tac_toe: MNKState):
        """The report starts with the search result and lists calls."""
        searcher = IterativeDeepening(60_000, 2, terminal_evaluation)
        report = profile_search(searcher, tic_tac_toe, top_n=5)
        assert report.startswith("search: ")
        assert "function calls" in report


class TestCompareEngines:
    """compare_engines tests."""

    def test_all_variants_agree(self, tic_tac_toe: MNKState, play, capsys):
        """Every engine variant finds the same value."""
        state = play(tic_tac_toe, [(1, 1), (0, 0)])
        rows = compare_engines(state, 3, terminal_evaluation)
        assert len(rows) == 6
        assert len({row["value"] for row in rows}) == 1
        assert "alpha-beta+cache" in capsys.readouterr().out

    def test_pruning_counts(self, tic_tac_toe: MNKState, play, capsys):
        """Plain minimax never cuts off and visits at least as many nodes."""
        state = play(tic_tac_toe, [(1, 1), (0, 0)])
        rows = {(r["engine"], r["policy"]): r for r in compare_engines(state, 4, terminal_evaluation)}
        plain = rows[("minimax", "linear")]
        pruned = rows[("alpha-beta", "linear")]
        assert plain["cutoffs"] == 0
        assert plain["cache_hits"] == 0
        assert pruned["nodes"] <= plain["nodes"]

    def test_runs_recorded(self, tic_tac_toe: MNKState, capsys):
        """Each variant lands in the profile registry."""
        compare_engines(tic_tac_toe, 1, terminal_evaluation)
        assert set(get_profiles()) == {
            f"{engine}/{policy}"
            for engine in ("minimax", "alpha-beta", "alpha-beta+cache")
            for policy in ("linear", "cache")
        }
