"""Extra rounds for seasons longer than one round-robin cycle."""

from .models import Club, Fixture, Round
from .pairing import coin_flip_fixture, count_matches, count_meetings, pair_key
from .rng import SeededRNG


def generate_balanced_repeat_rounds(
    club_ids: list[str],
    existing_rounds: list[Round],
    target_full_rounds: int,
    clubs: dict[str, Club],
    rng: SeededRNG,
) -> list[Round]:
    """
    Greedily generate rounds until there are target_full_rounds in total.

    Each round takes the club with the fewest matches so far and pairs it
    with the opponent it has met least, breaking ties by that opponent's
    match count. Repeats until fewer than two clubs are left unpaired, so an
    odd club count rests the busiest club.
    """
    meetings = count_meetings(existing_rounds)
    totals = count_matches(club_ids, existing_rounds)

    rounds: list[Round] = []
    for _ in range(len(existing_rounds), target_full_rounds):
        available = rng.shuffle(club_ids)
        # Stable sort keeps the shuffled order among equal totals
        available.sort(key=lambda c: totals[c])

        fixtures: list[Fixture] = []
        while len(available) >= 2:
            club = available.pop(0)

            best_idx = 0
            best_meetings = meetings[pair_key(club, available[0])]
            best_total = totals[available[0]]
            for i in range(1, len(available)):
                candidate = available[i]
                candidate_meetings = meetings[pair_key(club, candidate)]
                candidate_total = totals[candidate]
                if candidate_meetings < best_meetings or (
                    candidate_meetings == best_meetings and candidate_total < best_total
                ):
                    best_idx = i
                    best_meetings = candidate_meetings
                    best_total = candidate_total

            opponent = available.pop(best_idx)
            fixtures.append(coin_flip_fixture(club, opponent, clubs, rng))

            meetings[pair_key(club, opponent)] += 1
            totals[club] += 1
            totals[opponent] += 1

        rounds.append(Round(number=0, name="", fixtures=tuple(fixtures)))

    return rounds
