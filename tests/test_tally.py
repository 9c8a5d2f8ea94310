"""
Tests for poll vote counting
"""
import pytest

from rateam.modules.polls.service import with_results
from rateam.modules.polls.tally import tally_poll, find_user_vote


def _votes(*indexes, poll_id="p1"):
    return [{"poll_id": poll_id, "user_id": f"u{i}", "option_index": idx} for i, idx in enumerate(indexes)]


def test_counts_and_percentages():
    results = tally_poll(["A", "B", "C"], _votes(0, 0, 1, 2), poll_id="p1")

    assert [r.votes for r in results] == [2, 1, 1]
    assert [r.percentage for r in results] == [50.0, 25.0, 25.0]
    assert [r.label for r in results] == ["A", "B", "C"]
    assert [r.index for r in results] == [0, 1, 2]


def test_no_votes_gives_zero_percentages():
    results = tally_poll(["Yes", "No"], [])

    assert [r.votes for r in results] == [0, 0]
    assert [r.percentage for r in results] == [0.0, 0.0]


def test_invalid_indexes_are_ignored():
    votes = _votes(0, 1, 5, -1) + [
        {"poll_id": "p1", "user_id": "x", "option_index": "1"},
        {"poll_id": "p1", "user_id": "y", "option_index": None},
        {"poll_id": "p1", "user_id": "z", "option_index": True},
    ]
    results = tally_poll(["A", "B"], votes, poll_id="p1")

    assert [r.votes for r in results] == [1, 1]
    assert sum(r.votes for r in results) == 2


def test_votes_of_other_polls_are_skipped():
    votes = _votes(0, 0, poll_id="p1") + _votes(1, 1, 1, poll_id="p2")
    results = tally_poll(["A", "B"], votes, poll_id="p1")

    assert [r.votes for r in results] == [2, 0]


@pytest.mark.parametrize("indexes", [(0,), (0, 1, 2), (2, 2, 1), (0, 1, 1, 2, 2, 2, 0)])
def test_percentages_sum_to_hundred(indexes):
    results = tally_poll(["A", "B", "C"], _votes(*indexes))

    assert sum(r.votes for r in results) == len(indexes)
    assert sum(r.percentage for r in results) == pytest.approx(100.0)


def test_find_user_vote():
    votes = _votes(1, 0, poll_id="p1") + _votes(1, poll_id="p2")
    options = ["A", "B"]

    assert find_user_vote(options, votes, "u1", poll_id="p1") == 0
    assert find_user_vote(options, votes, "u0", poll_id="p2") == 1
    assert find_user_vote(options, votes, "nobody", poll_id="p1") is None
    assert find_user_vote(options, votes, None) is None


@pytest.mark.parametrize("stored", [2, -1, "0", None, True])
def test_find_user_vote_ignores_invalid_index(stored):
    votes = [{"poll_id": "p1", "user_id": "u1", "option_index": stored}]
    assert find_user_vote(["A", "B"], votes, "u1", poll_id="p1") is None


def test_pizza_sushi_display_results():
    poll = {"id": "p1", "title": "Lunch", "options": ["Pizza", "Sushi"], "status": "active"}
    votes = [
        {"poll_id": "p1", "user_id": "u1", "option_index": 0},
        {"poll_id": "p1", "user_id": "u2", "option_index": 0},
        {"poll_id": "p1", "user_id": "u3", "option_index": 1},
    ]

    response = with_results(poll, votes, user_id="u3")

    assert [r.votes for r in response.results] == [2, 1]
    assert [r.percentage for r in response.results] == [66.7, 33.3]
    assert response.total_votes == 3
    assert response.my_vote == 1


def test_my_vote_matches_results_entry():
    poll = {"id": "p1", "title": "Lunch", "options": ["Pizza", "Sushi"], "status": "active"}
    votes = [{"poll_id": "p1", "user_id": "u1", "option_index": 7}]

    response = with_results(poll, votes, user_id="u1")

    assert response.total_votes == 0
    assert response.my_vote is None
