"""
Tests for balanced repeat rounds and season assembly.
"""

from season_scheduler.assembler import assemble_rounds
from season_scheduler.pairing import count_matches
from season_scheduler.repeat_rounds import generate_balanced_repeat_rounds
from season_scheduler.rng import SeededRNG
from season_scheduler.round_robin import generate_round_robin_rounds


def test_repeat_rounds_fill_to_target(clubs10) -> None:
    rng = SeededRNG(4)
    club_ids = list(clubs10)
    cycle = generate_round_robin_rounds(club_ids, clubs10, rng, max_rounds=20)
    extra = generate_balanced_repeat_rounds(club_ids, cycle, 14, clubs10, rng)

    assert len(cycle) == 9
    assert len(extra) == 5
    for r in extra:
        assert sorted(r.club_ids) == sorted(club_ids)


def test_odd_club_count_stays_balanced(make_clubs) -> None:
    clubs = make_clubs(7)
    club_ids = list(clubs)
    rng = SeededRNG(2)
    cycle = generate_round_robin_rounds(club_ids, clubs, rng, max_rounds=20)
    extra = generate_balanced_repeat_rounds(club_ids, cycle, 12, clubs, rng)

    totals = count_matches(club_ids, cycle + extra)
    assert max(totals.values()) - min(totals.values()) <= 1


def test_assemble_numbers_rounds_without_byes(clubs10) -> None:
    club_ids = list(clubs10)
    rng = SeededRNG(1)
    full = generate_round_robin_rounds(club_ids, clubs10, rng, max_rounds=9)
    rounds = assemble_rounds(full, club_ids, clubs10, rng, target_rounds=9)

    assert [r.number for r in rounds] == list(range(1, 10))
    assert [r.name for r in rounds] == [f"Round {n}" for n in range(1, 10)]
    assert [r.fixtures for r in rounds] == [r.fixtures for r in full]


def test_assemble_places_bye_rounds(clubs10) -> None:
    club_ids = list(clubs10)
    rng = SeededRNG(1)
    full = generate_round_robin_rounds(club_ids, clubs10, rng, max_rounds=7)
    groups = [club_ids[:4], club_ids[4:8], club_ids[8:]]
    rounds = assemble_rounds(
        full, club_ids, clubs10, rng, target_rounds=10,
        bye_groups=groups, bye_round_indices=[2, 5, 7],
    )

    assert len(rounds) == 10
    assert [r.number for r in rounds] == list(range(1, 11))
    assert [i for i, r in enumerate(rounds) if r.is_bye] == [2, 5, 7]
    for round_, group in zip((rounds[2], rounds[5], rounds[7]), groups):
        assert round_.bye_club_ids == frozenset(group)
        assert sorted(round_.club_ids) == sorted(set(club_ids) - set(group))


def test_bye_rounds_avoid_pairs_from_earlier_bye_rounds(make_clubs) -> None:
    clubs = make_clubs(6)
    club_ids = list(clubs)
    resting = club_ids[4:]

    for seed in range(10):
        rounds = assemble_rounds(
            [], club_ids, clubs, SeededRNG(seed), target_rounds=2,
            bye_groups=[resting, resting], bye_round_indices=[0, 1],
        )

        first, second = (
            {frozenset((f.home_club_id, f.away_club_id)) for f in r.fixtures}
            for r in rounds
        )
        assert len(first) == len(second) == 2
        assert not first & second
