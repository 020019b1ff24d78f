"""
Match day scheduling.

Spreads a round's fixtures across the weekend's time slots. Blockbusters
keep the slot they were pinned to, the requesting club gets the preferred
slot, and everyone else is shuffled across the remaining slots.
"""

from dataclasses import replace

from .config import DEFAULT_MATCH_SLOTS
from .models import Club, Fixture, MatchSlot, Round
from .rng import SeededRNG

PREFERRED_DAY = "Saturday-Twilight"

# Days used for short rounds, in slot order
SMALL_ROUND_DAYS = ("Friday", "Saturday-Twilight", "Saturday-Night", "Sunday-Early")
SMALL_ROUND_SIZE = 4

PRIME_TIME_DAYS = frozenset({"Friday", "Saturday-Night"})
PRIME_TIME_SWAP_CHANCE = 0.7


def _has_pinned_slot(fixture: Fixture) -> bool:
    return fixture.is_blockbuster and bool(fixture.match_day) and bool(fixture.scheduled_time)


def _small_round_slots(slots: list[MatchSlot]) -> list[MatchSlot]:
    """Curated four-slot subset; falls back to the slot at the same position."""
    chosen = []
    for position, day in enumerate(SMALL_ROUND_DAYS):
        match = next((s for s in slots if s.day == day), None)
        chosen.append(match if match is not None else slots[position])
    return chosen


def schedule_round_days(
    fixtures: tuple[Fixture, ...],
    requesting_club_id: str | None,
    rng: SeededRNG,
    enabled_slots: list[MatchSlot] | None = None,
) -> tuple[Fixture, ...]:
    """
    Assign a day and time to every fixture in a round.

    Blockbusters with a pinned slot are left alone and moved to the end.
    Rounds of four or fewer fixtures use a curated four-slot subset. When
    fixtures outnumber slots the assignment wraps around.
    """
    if not fixtures:
        return fixtures

    pinned = [f for f in fixtures if _has_pinned_slot(f)]
    regulars = [f for f in fixtures if not _has_pinned_slot(f)]
    if not regulars:
        return fixtures

    slots = list(enabled_slots) if enabled_slots else list(DEFAULT_MATCH_SLOTS)
    count = len(regulars)

    if count <= SMALL_ROUND_SIZE and len(slots) > SMALL_ROUND_SIZE:
        active = _small_round_slots(slots)
    else:
        active = slots

    preferred_idx = next(
        (i for i, s in enumerate(active) if s.day == PREFERRED_DAY),
        min(3, len(active) - 1),
    )

    requesting_idx = next(
        (
            i for i, f in enumerate(regulars)
            if requesting_club_id is not None and f.involves(requesting_club_id)
        ),
        -1,
    )

    slot_order = rng.shuffle(range(min(count, len(active))))

    scheduled = []
    for i, fixture in enumerate(regulars):
        if i == requesting_idx:
            slot_idx = preferred_idx
        elif i < len(slot_order):
            slot_idx = slot_order[i]
        else:
            slot_idx = i % len(active)
        slot = active[slot_idx]
        scheduled.append(fixture.with_slot(slot.day, slot.time))

    return tuple(scheduled + pinned)


def schedule_season_days(
    rounds: list[Round],
    requesting_club_id: str | None,
    rng: SeededRNG,
    enabled_slots: list[MatchSlot] | None = None,
) -> list[Round]:
    return [
        replace(
            round_,
            fixtures=schedule_round_days(round_.fixtures, requesting_club_id, rng, enabled_slots),
        )
        for round_ in rounds
    ]


def apply_prime_time_bias(
    rounds: list[Round],
    clubs: dict[str, Club],
    rng: SeededRNG,
) -> list[Round]:
    """
    Push large-tier clubs into prime time.

    Within each round, pairs a large-club fixture outside prime time with a
    fixture of smaller clubs inside it and swaps their slots with 70%
    probability. Blockbusters are never touched.
    """
    large = {club_id for club_id, club in clubs.items() if club.tier == "large"}

    result = []
    for round_ in rounds:
        if round_.is_finals:
            result.append(round_)
            continue

        fixtures = list(round_.fixtures)
        large_off_prime: list[int] = []
        small_in_prime: list[int] = []
        for i, f in enumerate(fixtures):
            if f.is_blockbuster:
                continue
            is_large = f.home_club_id in large or f.away_club_id in large
            is_prime = f.match_day in PRIME_TIME_DAYS
            if is_large and not is_prime:
                large_off_prime.append(i)
            if not is_large and is_prime:
                small_in_prime.append(i)

        for large_idx, small_idx in zip(large_off_prime, small_in_prime):
            if not rng.chance(PRIME_TIME_SWAP_CHANCE):
                continue
            big, small = fixtures[large_idx], fixtures[small_idx]
            fixtures[large_idx] = big.with_slot(small.match_day, small.scheduled_time)
            fixtures[small_idx] = small.with_slot(big.match_day, big.scheduled_time)

        result.append(replace(round_, fixtures=tuple(fixtures)))

    return result
