"""Merge full rounds and bye rounds into one numbered season."""

from dataclasses import replace

from .byes import generate_bye_round_fixtures
from .models import Club, Round
from .rng import SeededRNG


def round_name(number: int) -> str:
    return f"Round {number}"


def assemble_rounds(
    full_rounds: list[Round],
    club_ids: list[str],
    clubs: dict[str, Club],
    rng: SeededRNG,
    target_rounds: int,
    bye_groups: list[list[str]] | None = None,
    bye_round_indices: list[int] | None = None,
) -> list[Round]:
    """
    Interleave bye rounds with full rounds and number them 1..N.

    Bye rounds go at the planned 0-based indices, one bye group each, with
    fixtures paired from the clubs not resting, favouring pairs that have
    not met in the full rounds or an earlier bye round. Full rounds fill
    every other index in their generated order.
    """
    if not bye_groups or not bye_round_indices:
        return [
            replace(round_, number=i + 1, name=round_name(i + 1))
            for i, round_ in enumerate(full_rounds)
        ]

    rounds: list[Round] = []
    full_idx = 0
    bye_group_idx = 0

    for r in range(target_rounds):
        number = r + 1
        if r in bye_round_indices and bye_group_idx < len(bye_groups):
            resting = bye_groups[bye_group_idx]
            bye_group_idx += 1
            playing = [club_id for club_id in club_ids if club_id not in resting]
            earlier_byes = [round_ for round_ in rounds if round_.is_bye]
            rounds.append(Round(
                number=number,
                name=round_name(number),
                fixtures=generate_bye_round_fixtures(
                    playing, full_rounds + earlier_byes, clubs, rng,
                ),
                is_bye=True,
                bye_club_ids=frozenset(resting),
            ))
        elif full_idx < len(full_rounds):
            rounds.append(replace(
                full_rounds[full_idx], number=number, name=round_name(number)
            ))
            full_idx += 1

    return rounds
