"""
Blockbuster placement.

Moves designated rivalry fixtures into their target rounds and stamps them
with the configured venue, day and time. Every move is built as a new list
of rounds and checked before it replaces the old one; a move that would put
a club in a round twice, or fixture a club that is resting, is abandoned
and the schedule is left as it was.
"""

import logging
from dataclasses import dataclass, field, replace

from .config import BLOCKBUSTER_AUTO_ROUNDS
from .match_days import schedule_round_days
from .models import BlockbusterSpec, Club, Fixture, MatchSlot, Round
from .rng import SeededRNG

logger = logging.getLogger(__name__)


@dataclass
class PlacementResult:
    """Outcome of placing a season's blockbusters."""
    rounds: list[Round]
    placed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    # (round number, fixture) removed by the duplicate sweep
    dropped: list[tuple[int, Fixture]] = field(default_factory=list)


def resolve_target_round(blockbuster: BlockbusterSpec, round_count: int) -> int:
    """1-based target round, clamped to the season."""
    if blockbuster.target_round is not None:
        target = blockbuster.target_round
    else:
        target = BLOCKBUSTER_AUTO_ROUNDS.get(blockbuster.id, 1)
    return max(1, min(target, round_count))


def blockbuster_fixture(blockbuster: BlockbusterSpec) -> Fixture:
    return Fixture(
        home_club_id=blockbuster.home_club_id,
        away_club_id=blockbuster.away_club_id,
        venue=blockbuster.venue,
        match_day=blockbuster.scheduled_day,
        scheduled_time=blockbuster.scheduled_time,
        is_blockbuster=True,
        blockbuster_name=blockbuster.name,
    )


def find_matchup(
    rounds: list[Round],
    club_a: str,
    club_b: str,
    prefer_round_idx: int,
) -> tuple[int, int] | None:
    """
    Locate an unpinned fixture between two clubs.

    Looks in the preferred round first, then every round in order. Returns
    (round index, fixture index) or None.
    """
    order = [prefer_round_idx] + [i for i in range(len(rounds)) if i != prefer_round_idx]
    for round_idx in order:
        for fixture_idx, f in enumerate(rounds[round_idx].fixtures):
            if f.is_between(club_a, club_b) and not f.is_blockbuster:
                return round_idx, fixture_idx
    return None


def exchange_chain(source: Round, target: Round, fixture_idx: int) -> tuple[set[int], set[int]]:
    """
    Fixtures that must change rounds together when one fixture moves.

    Starting from source.fixtures[fixture_idx], follows each club into its
    fixture in the other round, and so on, until the set is closed. Swapping
    the two returned index sets between the rounds keeps every club on the
    same number of fixtures in each round.
    """
    source_by_club = {c: i for i, f in enumerate(source.fixtures) for c in f.club_ids}
    target_by_club = {c: i for i, f in enumerate(target.fixtures) for c in f.club_ids}

    in_source = {fixture_idx}
    in_target: set[int] = set()
    frontier = [(True, fixture_idx)]
    while frontier:
        from_source, idx = frontier.pop()
        fixture = (source if from_source else target).fixtures[idx]
        other_by_club = target_by_club if from_source else source_by_club
        other_set = in_target if from_source else in_source
        for club_id in fixture.club_ids:
            j = other_by_club.get(club_id)
            if j is not None and j not in other_set:
                other_set.add(j)
                frontier.append((not from_source, j))

    return in_source, in_target


def is_consistent(round_: Round) -> bool:
    """No club twice, and no resting club fixtured."""
    club_ids = round_.club_ids
    if len(club_ids) != len(set(club_ids)):
        return False
    return not round_.bye_club_ids.intersection(club_ids)


def _move_into_target(
    rounds: list[Round],
    blockbuster: BlockbusterSpec,
    source_idx: int,
    fixture_idx: int,
    target_idx: int,
) -> list[Round] | None:
    """New round list with the blockbuster in its target round, or None."""
    source, target = rounds[source_idx], rounds[target_idx]
    out_of_source, out_of_target = exchange_chain(source, target, fixture_idx)

    moving_to_source = [target.fixtures[i] for i in sorted(out_of_target)]
    moving_to_target = [
        blockbuster_fixture(blockbuster) if i == fixture_idx else source.fixtures[i]
        for i in sorted(out_of_source)
    ]

    # Earlier blockbusters stay where they were put
    if any(f.is_blockbuster for f in moving_to_source):
        return None
    if any(source.fixtures[i].is_blockbuster for i in out_of_source if i != fixture_idx):
        return None

    new_source = replace(source, fixtures=tuple(
        [f for i, f in enumerate(source.fixtures) if i not in out_of_source] + moving_to_source
    ))
    new_target = replace(target, fixtures=tuple(
        [f for i, f in enumerate(target.fixtures) if i not in out_of_target] + moving_to_target
    ))
    if not (is_consistent(new_source) and is_consistent(new_target)):
        return None

    new_rounds = list(rounds)
    new_rounds[source_idx] = new_source
    new_rounds[target_idx] = new_target
    return new_rounds


def remove_duplicate_fixtures(rounds: list[Round]) -> tuple[list[Round], list[tuple[int, Fixture]]]:
    """
    Drop any fixture that puts a club in a round twice.

    Later fixtures win, so a blockbuster appended to a round survives.
    Returns the cleaned rounds and every (round number, fixture) removed.
    """
    cleaned: list[Round] = []
    dropped: list[tuple[int, Fixture]] = []
    for round_ in rounds:
        seen: set[str] = set()
        keep: list[Fixture] = []
        for f in reversed(round_.fixtures):
            if f.home_club_id in seen or f.away_club_id in seen:
                dropped.append((round_.number, f))
                continue
            seen.update(f.club_ids)
            keep.append(f)
        if len(keep) == len(round_.fixtures):
            cleaned.append(round_)
        else:
            cleaned.append(replace(round_, fixtures=tuple(reversed(keep))))
    return cleaned, dropped


def place_blockbusters(
    rounds: list[Round],
    blockbusters: list[BlockbusterSpec],
    clubs: dict[str, Club],
    rng: SeededRNG,
    enabled_slots: list[MatchSlot] | None = None,
    requesting_club_id: str | None = None,
) -> PlacementResult:
    """
    Place each enabled blockbuster whose clubs are both in the league.

    A matchup already in its target round only has its metadata replaced.
    Otherwise it is moved there along with the chain of fixtures that must
    trade rounds with it. Rounds disturbed by a move are re-scheduled for
    day and time once every blockbuster is placed.
    """
    result = PlacementResult(rounds=list(rounds))
    disturbed: set[int] = set()

    for bb in blockbusters:
        if not bb.enabled:
            continue
        if bb.home_club_id not in clubs or bb.away_club_id not in clubs:
            logger.debug("Skipping blockbuster %s: club not in league", bb.id)
            result.skipped.append(bb.id)
            continue
        if not result.rounds:
            result.skipped.append(bb.id)
            continue

        target_idx = resolve_target_round(bb, len(result.rounds)) - 1
        found = find_matchup(result.rounds, bb.home_club_id, bb.away_club_id, target_idx)
        if found is None:
            logger.debug("Skipping blockbuster %s: no free matchup in season", bb.id)
            result.skipped.append(bb.id)
            continue

        source_idx, fixture_idx = found
        if source_idx == target_idx:
            target = result.rounds[target_idx]
            fixtures = list(target.fixtures)
            fixtures[fixture_idx] = blockbuster_fixture(bb)
            result.rounds[target_idx] = replace(target, fixtures=tuple(fixtures))
            result.placed.append(bb.id)
            continue

        moved = _move_into_target(result.rounds, bb, source_idx, fixture_idx, target_idx)
        if moved is None:
            logger.debug(
                "Blockbuster %s left in round %d: cannot move to round %d safely",
                bb.id, source_idx + 1, target_idx + 1,
            )
            result.skipped.append(bb.id)
            continue

        result.rounds = moved
        disturbed.update((source_idx, target_idx))
        result.placed.append(bb.id)

    for idx in sorted(disturbed):
        round_ = result.rounds[idx]
        result.rounds[idx] = replace(round_, fixtures=schedule_round_days(
            round_.fixtures, requesting_club_id, rng, enabled_slots,
        ))

    result.rounds, result.dropped = remove_duplicate_fixtures(result.rounds)
    if result.dropped:
        logger.warning(
            "Duplicate sweep removed %d fixture(s) after blockbuster placement",
            len(result.dropped),
        )
    return result
