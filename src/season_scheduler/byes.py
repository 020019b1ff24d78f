"""
Bye round planning.

A bye round rests one group of clubs while the rest play. Groups are sized
so the clubs still playing can all be paired, and bye rounds sit around
the middle of the season, away from the first and last rounds.
"""

from .models import Club, Fixture, Round
from .pairing import coin_flip_fixture, count_meetings, pair_key
from .rng import SeededRNG


def byes_apply(
    club_count: int,
    target_rounds: int,
    byes_enabled: bool,
    bye_round_count: int,
) -> bool:
    """Byes are only used for an even club count with rounds to spare."""
    return (
        byes_enabled
        and club_count % 2 == 0
        and bye_round_count > 0
        and target_rounds > bye_round_count
    )


def compute_bye_groups(
    club_ids: list[str],
    bye_round_count: int,
    rng: SeededRNG,
) -> list[list[str]]:
    """
    Split clubs into one group per bye round.

    Groups are floor(n / count) clubs, plus one for the first n % count
    groups. A group is grown by one when resting it would leave an odd
    number of clubs playing. Leftover clubs join the last group.
    """
    n = len(club_ids)
    shuffled = rng.shuffle(club_ids)
    base_size, remainder = divmod(n, bye_round_count)

    groups: list[list[str]] = []
    idx = 0
    for g in range(bye_round_count):
        size = base_size + (1 if g < remainder else 0)
        if (n - size) % 2 != 0:
            size += 1
        if idx + size > n:
            size = n - idx
        groups.append(shuffled[idx:idx + size])
        idx += size

    if idx < n:
        groups[-1].extend(shuffled[idx:])

    return groups


def compute_bye_round_indices(target_rounds: int, bye_round_count: int) -> list[int]:
    """
    0-based round indices for the bye rounds, sorted.

    Evenly spaced around the season midpoint, never the first or last round,
    and always distinct.
    """
    spacing = max(1, target_rounds // (bye_round_count + 1))
    season_middle = target_rounds // 2
    offset = (bye_round_count // 2) * spacing

    indices: list[int] = []
    for i in range(bye_round_count):
        idx = season_middle - offset + i * spacing
        idx = max(1, min(target_rounds - 2, idx))
        while idx in indices:
            idx += 1
        indices.append(idx)

    return sorted(indices)


def generate_bye_round_fixtures(
    playing_clubs: list[str],
    existing_rounds: list[Round],
    clubs: dict[str, Club],
    rng: SeededRNG,
) -> tuple[Fixture, ...]:
    """Pair the clubs playing in a bye round, preferring the least-met opponents."""
    meetings = count_meetings(existing_rounds)
    available = rng.shuffle(playing_clubs)

    fixtures: list[Fixture] = []
    while len(available) >= 2:
        club = available.pop(0)
        best_idx = min(
            range(len(available)),
            key=lambda i: meetings[pair_key(club, available[i])],
        )
        opponent = available.pop(best_idx)
        fixtures.append(coin_flip_fixture(club, opponent, clubs, rng))

    return tuple(fixtures)
