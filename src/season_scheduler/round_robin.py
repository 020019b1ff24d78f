"""
Round-robin round generation (circle method).

One club is held fixed and the rest rotate one position per round, so N
clubs (N even) meet each other exactly once over N-1 rounds. An odd club
count gets a BYE sentinel; whoever draws the sentinel sits that round out.
"""

from .models import Club, Round
from .pairing import coin_flip_fixture, make_fixture
from .rng import SeededRNG

# Placeholder opponent that makes an odd club count even
BYE_SENTINEL = "__BYE__"


def generate_round_robin_rounds(
    club_ids: list[str],
    clubs: dict[str, Club],
    rng: SeededRNG,
    max_rounds: int,
) -> list[Round]:
    """
    Generate up to one full round-robin cycle of rounds.

    Rounds are returned unnumbered (number 0); the assembler numbers them
    once bye rounds have been interleaved.

    Args:
        club_ids: Clubs to schedule
        clubs: Club records, used for home grounds
        rng: Source of the club shuffle and home/away coin flips
        max_rounds: Stop after this many rounds even if the cycle is longer
    """
    order = rng.shuffle(club_ids)
    if len(order) % 2 == 1:
        order.append(BYE_SENTINEL)

    cycle_length = len(order) - 1
    half = len(order) // 2

    fixed = order[0]
    rotating = order[1:]

    rounds: list[Round] = []
    for r in range(min(cycle_length, max_rounds)):
        fixtures = []

        # Fixed club alternates home and away by round parity
        opponent = rotating[0]
        if BYE_SENTINEL not in (fixed, opponent):
            if r % 2 == 0:
                fixtures.append(make_fixture(fixed, opponent, clubs))
            else:
                fixtures.append(make_fixture(opponent, fixed, clubs))

        # Mirror the remaining rotating clubs: 1 v last, 2 v second last, ...
        for i in range(1, half):
            a = rotating[i]
            b = rotating[len(rotating) - i]
            if BYE_SENTINEL in (a, b):
                continue
            fixtures.append(coin_flip_fixture(a, b, clubs, rng))

        rounds.append(Round(number=0, name="", fixtures=tuple(fixtures)))

        # Rotate: last moves to front
        rotating = [rotating[-1]] + rotating[:-1]

    return rounds
