"""Export a season to spreadsheet-friendly formats."""

from .models import Club, Season
from .pairing import count_meetings, pair_key


def _club_name(club_id: str, clubs: dict[str, Club] | None) -> str:
    if clubs and club_id in clubs:
        return clubs[club_id].name
    return club_id


def season_to_tsv(season: Season, clubs: dict[str, Club] | None = None) -> str:
    """
    Export the season to TSV for spreadsheet import.

    One row per fixture, regular rounds first and then any finals rounds.
    Bye rounds get an extra row listing the clubs resting.
    """
    lines: list[str] = ["Round\tDay\tTime\tHome\tAway\tVenue\tNote"]

    for round_ in season.rounds + season.finals_rounds:
        for f in round_.fixtures:
            note = f.blockbuster_name or f.label or ""
            lines.append("\t".join([
                round_.name,
                f.match_day or "",
                f.scheduled_time or "",
                _club_name(f.home_club_id, clubs),
                _club_name(f.away_club_id, clubs),
                f.venue,
                note,
            ]))
        if round_.bye_club_ids:
            resting = ", ".join(_club_name(c, clubs) for c in sorted(round_.bye_club_ids))
            lines.append(f"{round_.name}\t\t\t\t\t\tBye: {resting}")

    return "\n".join(lines)


def export_season_tsv(season: Season, filepath: str, clubs: dict[str, Club] | None = None) -> None:
    """Export the season to a TSV file."""
    tsv_content = season_to_tsv(season, clubs)
    with open(filepath, "w") as f:
        f.write(tsv_content)


def meetings_table_to_tsv(season: Season, club_ids: list[str]) -> str:
    """
    Two-way table of how many times each pair of clubs meets.

    Each cell shows total meetings in the regular season.
    """
    meetings = count_meetings(season.rounds)

    lines: list[str] = ["\t".join([""] + club_ids)]
    for a in club_ids:
        row = [a]
        for b in club_ids:
            row.append("-" if a == b else str(meetings[pair_key(a, b)]))
        lines.append("\t".join(row))

    return "\n".join(lines)


def export_meetings_table(season: Season, club_ids: list[str], filepath: str) -> None:
    """Export the meetings table to a TSV file."""
    tsv_content = meetings_table_to_tsv(season, club_ids)
    with open(filepath, "w") as f:
        f.write(tsv_content)
