"""Standings within a round-robin finals series."""

from .models import FinalType, LadderEntry, MatchResult


def round_robin_standings(
    ladder: list[LadderEntry],
    results: list[MatchResult],
    qualifying_teams: int,
) -> list[LadderEntry]:
    """
    Re-rank the qualifying clubs by their round-robin finals record.

    Orders by wins in played, non-grand-final finals, then points scored in
    those matches, then original ladder position. A drawn match counts as a
    win for the home club.
    """
    qualified = ladder[:qualifying_teams]
    wins = {entry.club_id: 0 for entry in qualified}
    scored = {entry.club_id: 0 for entry in qualified}

    for result in results:
        if not (result.is_final and result.is_played) or result.final_type is FinalType.GRAND:
            continue
        if result.home_club_id in scored:
            scored[result.home_club_id] += result.home_score
        if result.away_club_id in scored:
            scored[result.away_club_id] += result.away_score
        winner = (
            result.home_club_id
            if result.home_score >= result.away_score
            else result.away_club_id
        )
        if winner in wins:
            wins[winner] += 1

    position = {entry.club_id: i for i, entry in enumerate(qualified)}
    return sorted(
        qualified,
        key=lambda e: (-wins[e.club_id], -scored[e.club_id], position[e.club_id]),
    )
