"""Shared helpers for pairing clubs into fixtures."""

from collections import Counter

from .models import Club, Fixture, Round
from .rng import SeededRNG


def pair_key(club_a: str, club_b: str) -> tuple[str, str]:
    """Order-independent key for a pair of clubs."""
    return (club_a, club_b) if club_a < club_b else (club_b, club_a)


def count_meetings(rounds: list[Round]) -> Counter[tuple[str, str]]:
    """How many times each pair of clubs has met across the given rounds."""
    meetings: Counter[tuple[str, str]] = Counter()
    for round_ in rounds:
        for f in round_.fixtures:
            meetings[pair_key(f.home_club_id, f.away_club_id)] += 1
    return meetings


def count_matches(club_ids: list[str], rounds: list[Round]) -> dict[str, int]:
    """Total fixtures per club across the given rounds."""
    totals = {club_id: 0 for club_id in club_ids}
    for round_ in rounds:
        for f in round_.fixtures:
            totals[f.home_club_id] = totals.get(f.home_club_id, 0) + 1
            totals[f.away_club_id] = totals.get(f.away_club_id, 0) + 1
    return totals


def make_fixture(home: str, away: str, clubs: dict[str, Club]) -> Fixture:
    """A fixture played at the home club's ground."""
    return Fixture(home_club_id=home, away_club_id=away, venue=clubs[home].home_ground)


def coin_flip_fixture(
    club_a: str,
    club_b: str,
    clubs: dict[str, Club],
    rng: SeededRNG,
) -> Fixture:
    """A fixture between two clubs with home ground decided by a coin flip."""
    if rng.chance(0.5):
        return make_fixture(club_a, club_b, clubs)
    return make_fixture(club_b, club_a, clubs)
