"""
Finals bracket definitions.

A format is a list of weeks; each week's matchups name their two teams
symbolically, either by ladder rank or by the winner/loser of an earlier
match. Every format is checked as a dependency graph before use: results
may only come from earlier weeks, ranks must be within the qualifying
teams, and the bracket must end in exactly one grand final.
"""

from graphlib import CycleError, TopologicalSorter

from .config import FinalsSettings
from .exceptions import FinalsFormatError
from .models import (
    FinalsFormat,
    FinalsWeek,
    FinalType,
    Matchup,
    Outcome,
    SourceKind,
    TeamSource,
)

GRAND_FINAL_LABEL = "Grand Final"

ladder = TeamSource.from_ladder


def winner(week: int, match: int) -> TeamSource:
    return TeamSource.from_result(week, match, Outcome.WINNER)


def loser(week: int, match: int) -> TeamSource:
    return TeamSource.from_result(week, match, Outcome.LOSER)


AFL_TOP_8 = FinalsFormat(
    id="afl-top-8",
    name="AFL Top 8",
    qualifying_teams=8,
    description=(
        "Top four get a second chance through the qualifying finals; "
        "fifth to eighth play sudden-death elimination finals."
    ),
    weeks=(
        FinalsWeek(1, "Finals Week 1", (
            Matchup("QF1", FinalType.QUALIFYING, ladder(1), ladder(4), is_elimination=False),
            Matchup("EF1", FinalType.ELIMINATION, ladder(5), ladder(8)),
            Matchup("QF2", FinalType.QUALIFYING, ladder(2), ladder(3), is_elimination=False),
            Matchup("EF2", FinalType.ELIMINATION, ladder(6), ladder(7)),
        )),
        FinalsWeek(2, "Finals Week 2", (
            Matchup("SF1", FinalType.SEMI, loser(1, 0), winner(1, 1)),
            Matchup("SF2", FinalType.SEMI, loser(1, 2), winner(1, 3)),
        )),
        FinalsWeek(3, "Finals Week 3", (
            Matchup("PF1", FinalType.PRELIMINARY, winner(1, 0), winner(2, 0)),
            Matchup("PF2", FinalType.PRELIMINARY, winner(1, 2), winner(2, 1)),
        )),
        FinalsWeek(4, GRAND_FINAL_LABEL, (
            Matchup("GF", FinalType.GRAND, winner(3, 0), winner(3, 1)),
        )),
    ),
)

PAGE_MCINTYRE_TOP_4 = FinalsFormat(
    id="page-mcintyre-top-4",
    name="Page-McIntyre Top 4",
    qualifying_teams=4,
    description=(
        "First plays second for a grand final berth with a second chance for "
        "the loser; third and fourth play off to stay alive."
    ),
    weeks=(
        FinalsWeek(1, "Finals Week 1", (
            Matchup("QF", FinalType.QUALIFYING, ladder(1), ladder(2), is_elimination=False),
            Matchup("EF", FinalType.ELIMINATION, ladder(3), ladder(4)),
        )),
        FinalsWeek(2, "Preliminary Final", (
            Matchup("PF", FinalType.PRELIMINARY, loser(1, 0), winner(1, 1)),
        )),
        FinalsWeek(3, GRAND_FINAL_LABEL, (
            Matchup("GF", FinalType.GRAND, winner(1, 0), winner(2, 0)),
        )),
    ),
)

TOP_6 = FinalsFormat(
    id="top-6",
    name="Top 6",
    qualifying_teams=6,
    description=(
        "First and second skip the first week; third to sixth play "
        "elimination finals for the right to meet them."
    ),
    weeks=(
        FinalsWeek(1, "Elimination Finals", (
            Matchup("EF1", FinalType.ELIMINATION, ladder(3), ladder(6)),
            Matchup("EF2", FinalType.ELIMINATION, ladder(4), ladder(5)),
        )),
        FinalsWeek(2, "Semi Finals", (
            Matchup("SF1", FinalType.SEMI, ladder(1), winner(1, 0)),
            Matchup("SF2", FinalType.SEMI, ladder(2), winner(1, 1)),
        )),
        FinalsWeek(3, GRAND_FINAL_LABEL, (
            Matchup("GF", FinalType.GRAND, winner(2, 0), winner(2, 1)),
        )),
    ),
)

STRAIGHT_KNOCKOUT = FinalsFormat(
    id="straight-knockout",
    name="Straight Knockout",
    qualifying_teams=8,
    description="Eight teams, lose and you are out.",
    weeks=(
        FinalsWeek(1, "Quarter Finals", (
            Matchup("QF1", FinalType.QUALIFYING, ladder(1), ladder(8)),
            Matchup("QF2", FinalType.QUALIFYING, ladder(2), ladder(7)),
            Matchup("QF3", FinalType.QUALIFYING, ladder(3), ladder(6)),
            Matchup("QF4", FinalType.QUALIFYING, ladder(4), ladder(5)),
        )),
        FinalsWeek(2, "Semi Finals", (
            Matchup("SF1", FinalType.SEMI, winner(1, 0), winner(1, 1)),
            Matchup("SF2", FinalType.SEMI, winner(1, 2), winner(1, 3)),
        )),
        FinalsWeek(3, GRAND_FINAL_LABEL, (
            Matchup("GF", FinalType.GRAND, winner(2, 0), winner(2, 1)),
        )),
    ),
)

# Ladder sources in the grand final week are re-ranked by round-robin standings
ROUND_ROBIN_TOP_4 = FinalsFormat(
    id="round-robin",
    name="Round Robin Top 4",
    qualifying_teams=4,
    description=(
        "The top four play each other once over three weeks; the best two "
        "of the round robin meet in the grand final."
    ),
    weeks=(
        FinalsWeek(1, "Round Robin Week 1", (
            Matchup("RR1", FinalType.SEMI, ladder(1), ladder(4), is_elimination=False),
            Matchup("RR2", FinalType.SEMI, ladder(2), ladder(3), is_elimination=False),
        )),
        FinalsWeek(2, "Round Robin Week 2", (
            Matchup("RR3", FinalType.SEMI, ladder(1), ladder(3), is_elimination=False),
            Matchup("RR4", FinalType.SEMI, ladder(2), ladder(4), is_elimination=False),
        )),
        FinalsWeek(3, "Round Robin Week 3", (
            Matchup("RR5", FinalType.SEMI, ladder(1), ladder(2), is_elimination=False),
            Matchup("RR6", FinalType.SEMI, ladder(3), ladder(4), is_elimination=False),
        )),
        FinalsWeek(4, GRAND_FINAL_LABEL, (
            Matchup("GF", FinalType.GRAND, ladder(1), ladder(2)),
        )),
    ),
)

ROUND_ROBIN_FORMAT_ID = ROUND_ROBIN_TOP_4.id

# Settings value that selects the custom format
CUSTOM_FORMAT_ID = "custom"


def build_dependency_graph(finals_format: FinalsFormat) -> dict[tuple[int, int], set[tuple[int, int]]]:
    """
    Map each match (week, index) to the matches its teams come from.

    Ladder sources contribute no edges.
    """
    graph: dict[tuple[int, int], set[tuple[int, int]]] = {}
    for week in finals_format.weeks:
        for index, matchup in enumerate(week.matchups):
            graph[(week.number, index)] = {
                (source.week, source.match)
                for source in (matchup.home, matchup.away)
                if source.kind is SourceKind.RESULT
            }
    return graph


def _source_problems(
    finals_format: FinalsFormat,
    week: FinalsWeek,
    matchup: Matchup,
    source: TeamSource,
    match_counts: dict[int, int],
) -> list[str]:
    where = f"Week {week.number} {matchup.label}"
    if source.kind is SourceKind.LADDER:
        if source.rank is None or not 1 <= source.rank <= finals_format.qualifying_teams:
            return [
                f"{where}: ladder rank {source.rank} outside 1-{finals_format.qualifying_teams}"
            ]
        return []

    if source.week is None or source.match is None or source.outcome is None:
        return [f"{where}: result source is missing week, match or outcome"]
    if source.week >= week.number:
        return [f"{where}: depends on week {source.week}, which is not earlier"]
    if source.week not in match_counts:
        return [f"{where}: depends on missing week {source.week}"]
    if not 0 <= source.match < match_counts[source.week]:
        return [f"{where}: depends on missing match {source.match} of week {source.week}"]
    return []


def finals_format_problems(finals_format: FinalsFormat) -> list[str]:
    """Every structural problem with a format; empty when it is usable."""
    problems: list[str] = []

    if finals_format.qualifying_teams < 2:
        problems.append(f"qualifying_teams must be at least 2, got {finals_format.qualifying_teams}")
    if not finals_format.weeks:
        return problems + ["format has no weeks"]

    numbers = [week.number for week in finals_format.weeks]
    if numbers != list(range(1, len(numbers) + 1)):
        problems.append(f"week numbers must run 1-{len(numbers)} in order, got {numbers}")

    match_counts = {week.number: len(week.matchups) for week in finals_format.weeks}

    for week in finals_format.weeks:
        if not week.matchups:
            problems.append(f"Week {week.number} has no matchups")
        seen: set[TeamSource] = set()
        for matchup in week.matchups:
            for source in (matchup.home, matchup.away):
                problems.extend(_source_problems(finals_format, week, matchup, source, match_counts))
                if source in seen:
                    problems.append(f"Week {week.number} {matchup.label}: {source} used twice")
                seen.add(source)

    grand_finals = [
        (week.number, matchup.label)
        for week in finals_format.weeks
        for matchup in week.matchups
        if matchup.final_type is FinalType.GRAND
    ]
    last_week = finals_format.weeks[-1]
    if len(grand_finals) != 1:
        problems.append(f"expected exactly one grand final, found {len(grand_finals)}")
    elif grand_finals[0][0] != last_week.number:
        problems.append(f"grand final must be in the last week (week {last_week.number})")

    try:
        tuple(TopologicalSorter(build_dependency_graph(finals_format)).static_order())
    except CycleError as e:
        problems.append(f"cyclic dependency between matches: {e.args[1]}")

    return problems


def check_finals_format(finals_format: FinalsFormat) -> FinalsFormat:
    """
    Return the format unchanged if it is usable.

    Raises:
        FinalsFormatError: listing every problem found
    """
    problems = finals_format_problems(finals_format)
    if problems:
        raise FinalsFormatError(
            f"Invalid finals format '{finals_format.id}': " + "; ".join(problems)
        )
    return finals_format


FINALS_FORMATS: dict[str, FinalsFormat] = {
    f.id: check_finals_format(f)
    for f in (AFL_TOP_8, PAGE_MCINTYRE_TOP_4, TOP_6, STRAIGHT_KNOCKOUT, ROUND_ROBIN_TOP_4)
}


def get_finals_format(format_id: str, custom: FinalsFormat | None = None) -> FinalsFormat:
    """
    Look up a finals format by id.

    A custom format is used when its id matches, after being checked.

    Raises:
        FinalsFormatError: unknown id, or an invalid custom format
    """
    if custom is not None and custom.id == format_id:
        return check_finals_format(custom)
    try:
        return FINALS_FORMATS[format_id]
    except KeyError:
        known = ", ".join(sorted(FINALS_FORMATS))
        raise FinalsFormatError(
            f"Unknown finals format '{format_id}' (known: {known})"
        ) from None


def finals_format_for(settings: FinalsSettings) -> FinalsFormat:
    """
    The finals format a season's settings select.

    A format id of "custom", or the custom format's own id, selects the
    custom format; anything else is looked up among the presets.

    Raises:
        FinalsFormatError: unknown id, "custom" without a custom format, or
            an invalid custom format
    """
    custom = settings.custom_format
    if settings.format_id == CUSTOM_FORMAT_ID:
        if custom is None:
            raise FinalsFormatError("Finals format 'custom' selected but no custom format given")
        return check_finals_format(custom)
    return get_finals_format(settings.format_id, custom)
