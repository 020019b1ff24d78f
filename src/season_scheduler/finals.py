"""
Finals series resolution.

Turns a finals format into playable rounds one week at a time. Each call is
stateless: the same ladder, format and completed results always produce the
same round, so a week can be resolved again after more matches are played.
A matchup whose teams depend on an unplayed match is left out until then.
"""

import logging

from .config import DEFAULT_SEASON_YEAR, GF_VENUES, FinalsSettings, GrandFinalVenueMode
from .exceptions import LadderError
from .finals_formats import ROUND_ROBIN_FORMAT_ID, check_finals_format
from .models import (
    Club,
    FinalsFormat,
    FinalType,
    Fixture,
    LadderEntry,
    MatchResult,
    Outcome,
    Round,
    Season,
    SourceKind,
    TeamSource,
)
from .rng import SeededRNG
from .standings import round_robin_standings

logger = logging.getLogger(__name__)


def get_winner(result: MatchResult) -> str:
    """
    Club id of the winner. The home club advances on a draw.

    Raises:
        ValueError: the match has not been played
    """
    if not result.is_played:
        raise ValueError(
            f"{result.home_club_id} vs {result.away_club_id} has no result, cannot determine winner"
        )
    if result.home_score >= result.away_score:
        return result.home_club_id
    return result.away_club_id


def get_loser(result: MatchResult) -> str:
    """
    Club id of the loser. The away club loses a draw.

    Raises:
        ValueError: the match has not been played
    """
    if not result.is_played:
        raise ValueError(
            f"{result.home_club_id} vs {result.away_club_id} has no result, cannot determine loser"
        )
    if result.home_score >= result.away_score:
        return result.away_club_id
    return result.home_club_id


def find_result(results: list[MatchResult], week: int, match: int) -> MatchResult | None:
    """The played finals result for a week's match index, if there is one."""
    for result in results:
        if (
            result.is_final
            and result.round_number == week
            and result.match_index == match
            and result.is_played
        ):
            return result
    return None


def resolve_team_source(
    source: TeamSource,
    ladder: list[LadderEntry],
    results: list[MatchResult],
) -> str | None:
    """
    Club id a team source refers to, or None if its match is still unplayed.

    Raises:
        LadderError: ladder rank beyond the end of the ladder
    """
    if source.kind is SourceKind.LADDER:
        if source.rank is None or not 1 <= source.rank <= len(ladder):
            raise LadderError(
                f"Ladder has {len(ladder)} entries, cannot resolve {source}"
            )
        return ladder[source.rank - 1].club_id

    result = find_result(results, source.week, source.match)
    if result is None:
        return None
    if source.outcome is Outcome.WINNER:
        return get_winner(result)
    return get_loser(result)


def order_by_ladder_position(
    club_a: str,
    club_b: str,
    ladder: list[LadderEntry],
) -> tuple[str, str]:
    """
    (higher ranked, lower ranked) by ladder position.

    Keeps the given order unless both clubs are on the ladder.
    """
    positions = {entry.club_id: i for i, entry in enumerate(ladder)}
    if club_a in positions and club_b in positions:
        if positions[club_b] < positions[club_a]:
            return club_b, club_a
    return club_a, club_b


def grand_final_venue(
    home_club_id: str,
    clubs: dict[str, Club],
    finals_format: FinalsFormat,
    settings: FinalsSettings | None = None,
    year: int = DEFAULT_SEASON_YEAR,
) -> str:
    """
    Venue for the grand final.

    Without settings the format's own venue is used. Rotation picks from the
    venue pool with a generator seeded by the year, so a season always gets
    the same venue.
    """
    if settings is None:
        return finals_format.grand_final_venue

    mode = settings.grand_final_venue_mode
    if mode is GrandFinalVenueMode.ROTATION:
        pool = settings.venue_pool or GF_VENUES
        return SeededRNG(year).pick(pool)
    if mode is GrandFinalVenueMode.HIGHER_RANKED:
        return clubs[home_club_id].home_ground
    return settings.grand_final_venue or finals_format.grand_final_venue


def resolve_finals_week(
    week_number: int,
    ladder: list[LadderEntry],
    results: list[MatchResult],
    finals_format: FinalsFormat,
    clubs: dict[str, Club],
    settings: FinalsSettings | None = None,
    year: int = DEFAULT_SEASON_YEAR,
) -> Round:
    """
    Build the round for one finals week.

    Args:
        week_number: 1-based finals week
        ladder: End of home-and-away ladder, best first
        results: Finals results so far; round_number is the finals week and
            match_index the matchup index within it
        finals_format: Bracket to resolve
        clubs: Club records, used for venues
        settings: Grand final venue settings
        year: Season year, seeds the rotating grand final venue

    Raises:
        FinalsFormatError: the format is malformed or has no such week
        LadderError: the ladder is too short for a referenced rank
    """
    week = check_finals_format(finals_format).week(week_number)

    source_ladder = ladder
    if finals_format.id == ROUND_ROBIN_FORMAT_ID and week.has_grand_final:
        source_ladder = round_robin_standings(ladder, results, finals_format.qualifying_teams)

    fixtures: list[Fixture] = []
    for index, matchup in enumerate(week.matchups):
        team_a = resolve_team_source(matchup.home, source_ladder, results)
        team_b = resolve_team_source(matchup.away, source_ladder, results)
        if team_a is None or team_b is None:
            logger.debug(
                "Week %d %s not ready: waiting on %s",
                week_number, matchup.label,
                matchup.home if team_a is None else matchup.away,
            )
            continue

        home, away = order_by_ladder_position(team_a, team_b, ladder)
        if matchup.final_type is FinalType.GRAND:
            venue = grand_final_venue(home, clubs, finals_format, settings, year)
        else:
            venue = clubs[home].home_ground

        fixtures.append(Fixture(
            home_club_id=home,
            away_club_id=away,
            venue=venue,
            final_type=matchup.final_type,
            label=matchup.label,
            match_index=index,
        ))

    return Round(
        number=week_number,
        name=week.label,
        fixtures=tuple(fixtures),
        is_finals=True,
    )


def _played_grand_final(results: list[MatchResult]) -> MatchResult | None:
    for result in results:
        if result.is_final and result.final_type is FinalType.GRAND and result.is_played:
            return result
    return None


def is_season_complete(results: list[MatchResult]) -> bool:
    """True once a grand final has been played."""
    return _played_grand_final(results) is not None


def get_premier(results: list[MatchResult]) -> str | None:
    """Winner of the grand final, or None if it has not been played."""
    grand_final = _played_grand_final(results)
    if grand_final is None:
        return None
    return get_winner(grand_final)


def next_finals_week(season: Season, finals_format: FinalsFormat) -> int | None:
    """
    Week number to resolve next, or None once every week is complete.

    A week resolved with matchups still missing is returned again.
    """
    if season.finals_rounds:
        last = season.finals_rounds[-1]
        if len(last.fixtures) < len(finals_format.week(last.number).matchups):
            return last.number
    upcoming = len(season.finals_rounds) + 1
    if upcoming > len(finals_format.weeks):
        return None
    return upcoming
