"""
Tests for finals week resolution.
"""

import pytest

from conftest import build_clubs, build_ladder, final_result
from season_scheduler.config import FinalsSettings, GrandFinalVenueMode
from season_scheduler.exceptions import FinalsFormatError, LadderError
from season_scheduler.finals import (
    get_loser,
    get_premier,
    get_winner,
    grand_final_venue,
    is_season_complete,
    next_finals_week,
    resolve_finals_week,
    resolve_team_source,
)
from season_scheduler.finals_formats import (
    AFL_TOP_8,
    PAGE_MCINTYRE_TOP_4,
    ROUND_ROBIN_TOP_4,
    ladder,
    winner,
)
from season_scheduler.models import (
    FinalsFormat,
    FinalsWeek,
    FinalType,
    MatchResult,
    Matchup,
    Round,
    Season,
    TeamSource,
)


def _pairs(round_: Round) -> list[tuple[str, str]]:
    return [(f.home_club_id, f.away_club_id) for f in round_.fixtures]


def test_top_8_week_1(clubs18, ladder18) -> None:
    week = resolve_finals_week(1, ladder18, [], AFL_TOP_8, clubs18)

    assert week.number == 1
    assert week.name == "Finals Week 1"
    assert week.is_finals
    assert _pairs(week) == [
        ("club00", "club03"),
        ("club04", "club07"),
        ("club01", "club02"),
        ("club05", "club06"),
    ]
    assert [f.label for f in week.fixtures] == ["QF1", "EF1", "QF2", "EF2"]
    assert [f.match_index for f in week.fixtures] == [0, 1, 2, 3]
    assert week.fixtures[0].final_type is FinalType.QUALIFYING
    assert week.fixtures[0].venue == "Ground 0"


def test_top_8_week_2_uses_week_1_results(clubs18, ladder18) -> None:
    results = [
        final_result(1, 0, "club00", "club03", 60, 80),  # club00 loses QF1
        final_result(1, 1, "club04", "club07", 70, 90),  # club07 wins EF1
        final_result(1, 2, "club01", "club02", 100, 50),
        final_result(1, 3, "club05", "club06", 88, 77),
    ]

    week = resolve_finals_week(2, ladder18, results, AFL_TOP_8, clubs18)

    # Higher ladder position hosts
    assert _pairs(week) == [("club00", "club07"), ("club02", "club05")]
    assert [f.label for f in week.fixtures] == ["SF1", "SF2"]
    assert week.fixtures[1].venue == "Ground 2"


def test_home_club_is_higher_ranked_whichever_side_it_comes_from(clubs18, ladder18) -> None:
    results = [
        final_result(1, 0, "club00", "club03", 50, 40),
        final_result(1, 1, "club04", "club07", 30, 40),
        final_result(1, 2, "club01", "club02", 50, 60),
        final_result(1, 3, "club05", "club06", 70, 60),
        final_result(2, 0, "club03", "club07", 20, 90),
        final_result(2, 1, "club01", "club05", 90, 20),
    ]

    week = resolve_finals_week(3, ladder18, results, AFL_TOP_8, clubs18)

    # PF1 is winner QF1 (club00) v winner SF1 (club07); PF2 winner QF2 (club02) v club01
    assert _pairs(week) == [("club00", "club07"), ("club01", "club02")]


def test_unresolved_matchups_are_skipped(clubs18, ladder18) -> None:
    results = [
        final_result(1, 0, "club00", "club03", 60, 80),
        final_result(1, 1, "club04", "club07", 70, 90),
        # QF2 scheduled but not yet played
        MatchResult(round_number=1, match_index=2, home_club_id="club01",
                    away_club_id="club02", is_final=True),
    ]

    week = resolve_finals_week(2, ladder18, results, AFL_TOP_8, clubs18)

    assert [f.label for f in week.fixtures] == ["SF1"]
    assert week.fixtures[0].match_index == 0


def test_resolution_is_repeatable(clubs18, ladder18) -> None:
    results = [final_result(1, 0, "club00", "club03", 60, 80)]
    first = resolve_finals_week(2, ladder18, results, AFL_TOP_8, clubs18)
    second = resolve_finals_week(2, ladder18, results, AFL_TOP_8, clubs18)
    assert first == second


def test_regular_season_results_are_ignored(clubs18, ladder18) -> None:
    """A home-and-away result with the same round and index is not a final."""
    results = [
        MatchResult(round_number=1, match_index=0, home_club_id="club00",
                    away_club_id="club03", home_score=10, away_score=90),
    ]
    week = resolve_finals_week(2, ladder18, results, AFL_TOP_8, clubs18)
    assert week.fixtures == ()


def test_missing_week_raises(clubs18, ladder18) -> None:
    with pytest.raises(FinalsFormatError):
        resolve_finals_week(5, ladder18, [], AFL_TOP_8, clubs18)


def test_reference_to_missing_match_raises(clubs18, ladder18) -> None:
    """A format built in code is checked before any week is resolved."""
    broken = FinalsFormat(id="broken", name="Broken", qualifying_teams=4, weeks=(
        FinalsWeek(1, "Semi Finals", (
            Matchup("SF1", FinalType.SEMI, ladder(1), ladder(4)),
            Matchup("SF2", FinalType.SEMI, ladder(2), ladder(3)),
        )),
        FinalsWeek(2, "Grand Final", (
            Matchup("GF", FinalType.GRAND, winner(1, 7), winner(1, 1)),
        )),
    ))
    results = [
        final_result(1, 0, "club00", "club03", 80, 60),
        final_result(1, 1, "club01", "club02", 80, 60),
    ]

    with pytest.raises(FinalsFormatError, match="missing match 7 of week 1"):
        resolve_finals_week(2, ladder18, results, broken, clubs18)
    with pytest.raises(FinalsFormatError):
        resolve_finals_week(1, ladder18, [], broken, clubs18)


def test_short_ladder_raises() -> None:
    clubs = build_clubs(3)
    ladder = build_ladder(list(clubs))
    with pytest.raises(LadderError):
        resolve_finals_week(1, ladder, [], AFL_TOP_8, clubs)


def test_team_source_from_ladder(ladder18) -> None:
    assert resolve_team_source(TeamSource.from_ladder(1), ladder18, []) == "club00"
    assert resolve_team_source(TeamSource.from_ladder(18), ladder18, []) == "club17"
    with pytest.raises(LadderError):
        resolve_team_source(TeamSource.from_ladder(19), ladder18, [])


def test_winner_and_loser() -> None:
    result = final_result(1, 0, "h", "a", 55, 70)
    assert get_winner(result) == "a"
    assert get_loser(result) == "h"


def test_draw_goes_to_home_club() -> None:
    result = final_result(1, 0, "h", "a", 64, 64)
    assert get_winner(result) == "h"
    assert get_loser(result) == "a"


def test_unplayed_match_has_no_winner() -> None:
    result = MatchResult(round_number=1, match_index=0, home_club_id="h",
                         away_club_id="a", is_final=True)
    with pytest.raises(ValueError):
        get_winner(result)
    with pytest.raises(ValueError):
        get_loser(result)


def test_grand_final_venue_modes(clubs18) -> None:
    assert grand_final_venue("club03", clubs18, AFL_TOP_8) == "MCG"

    fixed = FinalsSettings(grand_final_venue="Optus Stadium")
    assert grand_final_venue("club03", clubs18, AFL_TOP_8, fixed) == "Optus Stadium"

    higher = FinalsSettings(grand_final_venue_mode=GrandFinalVenueMode.HIGHER_RANKED)
    assert grand_final_venue("club03", clubs18, AFL_TOP_8, higher) == "Ground 3"

    pool = ("Gabba", "SCG", "Adelaide Oval")
    rotation = FinalsSettings(grand_final_venue_mode=GrandFinalVenueMode.ROTATION, venue_pool=pool)
    venue = grand_final_venue("club03", clubs18, AFL_TOP_8, rotation, year=2031)
    assert venue in pool
    assert grand_final_venue("club09", clubs18, AFL_TOP_8, rotation, year=2031) == venue


def test_grand_final_fixture(clubs18, ladder18) -> None:
    results = [
        final_result(1, 0, "club00", "club01", 90, 60),
        final_result(1, 1, "club02", "club03", 40, 80),
        final_result(2, 0, "club01", "club03", 50, 70),
    ]
    settings = FinalsSettings(grand_final_venue_mode=GrandFinalVenueMode.HIGHER_RANKED)

    week = resolve_finals_week(3, ladder18, results, PAGE_MCINTYRE_TOP_4, clubs18, settings)

    assert week.name == "Grand Final"
    assert _pairs(week) == [("club00", "club03")]
    assert week.fixtures[0].final_type is FinalType.GRAND
    assert week.fixtures[0].venue == "Ground 0"


def test_round_robin_grand_final_uses_round_robin_standings() -> None:
    clubs = build_clubs(4)
    a, b, c, d = list(clubs)
    ladder = build_ladder([a, b, c, d])
    results = [
        final_result(1, 0, a, d, 50, 60, FinalType.SEMI),
        final_result(1, 1, b, c, 50, 60, FinalType.SEMI),
        final_result(2, 0, a, c, 50, 60, FinalType.SEMI),
        final_result(2, 1, b, d, 50, 60, FinalType.SEMI),
        final_result(3, 0, a, b, 70, 60, FinalType.SEMI),
        final_result(3, 1, c, d, 70, 60, FinalType.SEMI),
    ]

    # Earlier weeks still use the home-and-away ladder
    week_3 = resolve_finals_week(3, ladder, [], ROUND_ROBIN_TOP_4, clubs)
    assert _pairs(week_3) == [(a, b), (c, d)]

    grand_final = resolve_finals_week(4, ladder, results, ROUND_ROBIN_TOP_4, clubs)
    assert _pairs(grand_final) == [(c, d)]
    assert grand_final.fixtures[0].venue == "MCG"


def test_premier() -> None:
    semis = [final_result(1, 0, "a", "b", 80, 70, FinalType.SEMI)]
    assert get_premier(semis) is None
    assert not is_season_complete(semis)

    unplayed = MatchResult(round_number=2, match_index=0, home_club_id="a",
                           away_club_id="c", is_final=True, final_type=FinalType.GRAND)
    assert get_premier(semis + [unplayed]) is None

    played = final_result(2, 0, "a", "c", 61, 99, FinalType.GRAND)
    assert get_premier(semis + [played]) == "c"
    assert is_season_complete(semis + [played])


def test_next_finals_week(clubs18, ladder18) -> None:
    season = Season(year=2026, rounds=[])
    assert next_finals_week(season, PAGE_MCINTYRE_TOP_4) == 1

    season.add_finals_round(resolve_finals_week(1, ladder18, [], PAGE_MCINTYRE_TOP_4, clubs18))
    assert next_finals_week(season, PAGE_MCINTYRE_TOP_4) == 2

    # Preliminary final waits on week 1, so week 2 comes back
    season.add_finals_round(resolve_finals_week(2, ladder18, [], PAGE_MCINTYRE_TOP_4, clubs18))
    assert season.finals_rounds[-1].fixtures == ()
    assert next_finals_week(season, PAGE_MCINTYRE_TOP_4) == 2

    results = [
        final_result(1, 0, "club00", "club01", 90, 60),
        final_result(1, 1, "club02", "club03", 40, 80),
    ]
    season.add_finals_round(resolve_finals_week(2, ladder18, results, PAGE_MCINTYRE_TOP_4, clubs18))
    assert len(season.finals_rounds) == 2
    assert _pairs(season.finals_rounds[1]) == [("club01", "club03")]
    assert next_finals_week(season, PAGE_MCINTYRE_TOP_4) == 3

    results.append(final_result(2, 0, "club01", "club03", 50, 70))
    season.add_finals_round(resolve_finals_week(3, ladder18, results, PAGE_MCINTYRE_TOP_4, clubs18))
    assert next_finals_week(season, PAGE_MCINTYRE_TOP_4) is None


def test_finals_weeks_must_arrive_in_order() -> None:
    season = Season(year=2026, rounds=[])
    with pytest.raises(ValueError):
        season.add_finals_round(Round(number=2, name="Finals Week 2", is_finals=True))
