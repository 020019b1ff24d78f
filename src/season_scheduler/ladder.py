"""
Home-and-away ladder.

Applies completed match results to a ladder and keeps it sorted by points,
then percentage. The ladder feeds ladder-rank sources in the finals.
"""

from dataclasses import replace

from .config import LadderPoints
from .models import LadderEntry, MatchResult


def create_initial_ladder(club_ids: list[str]) -> list[LadderEntry]:
    return [LadderEntry(club_id=club_id) for club_id in club_ids]


def calculate_percentage(points_for: int, points_against: int) -> float:
    """Points for as a percentage of points against; 0 when nothing conceded."""
    if points_against <= 0:
        return 0.0
    return points_for / points_against * 100


def sort_ladder(entries: list[LadderEntry]) -> list[LadderEntry]:
    """Points descending, then percentage descending. Ties keep their order."""
    return sorted(entries, key=lambda e: (-e.points, -e.percentage))


def _record(entry: LadderEntry, scored: int, conceded: int, points: LadderPoints) -> LadderEntry:
    won = scored > conceded
    lost = scored < conceded
    points_for = entry.points_for + scored
    points_against = entry.points_against + conceded
    return replace(
        entry,
        played=entry.played + 1,
        wins=entry.wins + int(won),
        losses=entry.losses + int(lost),
        draws=entry.draws + int(not won and not lost),
        points=entry.points + (points.win if won else points.loss if lost else points.draw),
        points_for=points_for,
        points_against=points_against,
        percentage=calculate_percentage(points_for, points_against),
    )


def apply_results(
    ladder: list[LadderEntry],
    results: list[MatchResult],
    points: LadderPoints | None = None,
) -> list[LadderEntry]:
    """
    Return a new sorted ladder with the played results applied.

    Unplayed results, finals and clubs not on the ladder are ignored. The
    input ladder is not modified.
    """
    points = points or LadderPoints()
    entries = {entry.club_id: replace(entry) for entry in ladder}

    for result in results:
        if not result.is_played or result.is_final:
            continue
        home = entries.get(result.home_club_id)
        away = entries.get(result.away_club_id)
        if home is None or away is None:
            continue
        entries[home.club_id] = _record(home, result.home_score, result.away_score, points)
        entries[away.club_id] = _record(away, result.away_score, result.home_score, points)

    return sort_ladder(list(entries.values()))
