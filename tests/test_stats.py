"""
Unit tests for the statistics engine. Histories are built from transient
Submission rows; nothing touches the database.
"""
from datetime import date, timedelta

from app.services.stats import (
    compute_all_player_stats,
    compute_head_to_head,
    compute_player_stats,
    rank_day_results,
)
from tests.factories import make_history, make_sub

D0 = date(2026, 2, 1)


def day(n: int) -> date:
    return D0 + timedelta(days=n)


class TestPlayerStats:
    def test_no_submissions_reports_zeros(self):
        stats = compute_player_stats({}, "P", day(0))
        assert stats.games_played == 0
        assert stats.win_percentage == 0
        assert stats.current_streak == 0
        assert stats.max_streak == 0
        assert stats.average_score == 0
        assert stats.score_distribution == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0, "6": 0, "X": 0}

    def test_win_win_loss_win_streaks(self):
        history = make_history([("P", day(i), s) for i, s in enumerate([3, 4, 7, 2])])
        stats = compute_player_stats(history, "P", day(3))
        assert stats.current_streak == 1
        assert stats.max_streak == 2
        assert stats.games_played == 4
        assert stats.win_percentage == 75
        assert stats.average_score == 3.0
        assert stats.score_distribution["X"] == 1
        assert stats.score_distribution["3"] == 1

    def test_gap_restarts_streak_at_one(self):
        history = make_history([("P", day(0), 3), ("P", day(1), 3), ("P", day(3), 4)])
        stats = compute_player_stats(history, "P", day(3))
        assert stats.current_streak == 1
        assert stats.max_streak == 2

    def test_idle_player_streak_decays(self):
        history = make_history([("P", day(0), 3), ("P", day(1), 3)])
        assert compute_player_stats(history, "P", day(2)).current_streak == 2
        assert compute_player_stats(history, "P", day(3)).current_streak == 0
        assert compute_player_stats(history, "P", day(3)).max_streak == 2

    def test_all_losses(self):
        history = make_history([("P", day(0), 7), ("P", day(1), 7)])
        stats = compute_player_stats(history, "P", day(1))
        assert stats.win_percentage == 0
        assert stats.average_score == 0
        assert stats.current_streak == 0
        assert stats.score_distribution["X"] == 2

    def test_average_rounds_to_two_places(self):
        history = make_history([("P", day(0), 3), ("P", day(1), 4), ("P", day(2), 4)])
        assert compute_player_stats(history, "P", day(2)).average_score == 3.67

    def test_win_percentage_rounds_half_up(self):
        # 1 win of 8 games = 12.5%
        rows = [("P", day(0), 2)] + [("P", day(i), 7) for i in range(1, 8)]
        assert compute_player_stats(make_history(rows), "P", day(7)).win_percentage == 13

    def test_other_players_days_ignored(self):
        history = make_history([("P", day(0), 3), ("Q", day(1), 2), ("P", day(2), 3)])
        stats = compute_player_stats(history, "P", day(2))
        assert stats.games_played == 2
        assert stats.current_streak == 1

    def test_history_order_does_not_matter(self):
        rows = [("P", day(i), s) for i, s in enumerate([3, 4, 7, 2])]
        forward = compute_player_stats(make_history(rows), "P", day(3))
        backward = compute_player_stats(make_history(reversed(rows)), "P", day(3))
        assert forward == backward

    def test_name_matched_ignoring_case(self):
        history = make_history([("Joe", day(0), 3), ("joe", day(1), 4)])
        stats = compute_player_stats(history, "joe", day(1))
        assert stats.games_played == 2
        assert stats.current_streak == 2

    def test_all_players(self):
        history = make_history([("A", day(0), 3), ("B", day(0), 5)])
        result = compute_all_player_stats(history, ["A", "B", "C"], day(0))
        assert set(result) == {"A", "B", "C"}
        assert result["C"].games_played == 0


class TestHeadToHead:
    def test_three_shared_days(self):
        history = make_history([
            ("A", day(0), 2), ("B", day(0), 4),
            ("A", day(1), 5), ("B", day(1), 5),
            ("A", day(2), 7), ("B", day(2), 3),
        ])
        h2h = compute_head_to_head(history, "A", "B")
        assert h2h.games_played == 3
        assert h2h.player1_wins == 1
        assert h2h.player2_wins == 1
        assert h2h.ties == 1
        assert h2h.player1_average_score == 3.5
        assert h2h.player2_average_score == 4.0

    def test_only_shared_days_count(self):
        history = make_history([("A", day(0), 2), ("B", day(1), 4), ("A", day(2), 3), ("B", day(2), 3)])
        h2h = compute_head_to_head(history, "A", "B")
        assert h2h.games_played == 1
        assert h2h.ties == 1
        assert h2h.player1_average_score == 3.0

    def test_no_wins_average_is_zero(self):
        history = make_history([("A", day(0), 7), ("B", day(0), 7)])
        h2h = compute_head_to_head(history, "A", "B")
        assert h2h.ties == 1
        assert h2h.player1_average_score == 0
        assert h2h.player2_average_score == 0

    def test_names_matched_ignoring_case(self):
        history = make_history([
            ("Joe", day(0), 2), ("Pete", day(0), 4),
            ("joe", day(1), 5), ("PETE", day(1), 3),
        ])
        h2h = compute_head_to_head(history, "joe", "Pete")
        assert h2h.games_played == 2
        assert h2h.player1_wins == 1
        assert h2h.player2_wins == 1

    def test_same_player_is_not_applicable(self):
        history = make_history([("A", day(0), 3)])
        assert compute_head_to_head(history, "A", "a") is None


class TestRanking:
    def test_score_then_alphabetical(self):
        subs = [make_sub("pete", day(0), 4), make_sub("Ana", day(0), 4),
                make_sub("Zed", day(0), 2), make_sub("Bo", day(0), 7)]
        assert [s.player for s in rank_day_results(subs)] == ["Zed", "Ana", "pete", "Bo"]
