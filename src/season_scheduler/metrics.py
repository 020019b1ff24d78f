"""Season fixture quality metrics."""

from collections import Counter
from dataclasses import dataclass

from .models import Season
from .pairing import count_meetings


@dataclass
class ScheduleMetrics:
    """Quality metrics for a season's fixture."""

    # Matches per club
    min_matches: int
    max_matches: int

    # Home games per club
    min_home_games: int
    max_home_games: int

    # Opponents: distinct clubs met per club
    min_unique_opponents: int
    max_unique_opponents: int

    # Pairs that meet more than once, and the most any pair meets
    repeat_pairs: int
    max_meetings: int

    # Bye rounds per club
    min_byes: int
    max_byes: int

    blockbusters_placed: int

    @property
    def match_spread(self) -> int:
        return self.max_matches - self.min_matches

    @property
    def home_game_spread(self) -> int:
        return self.max_home_games - self.min_home_games

    def __str__(self) -> str:
        lines = [
            "Fixture Quality Metrics",
            "=" * 40,
            "Matches per club:",
            f"  Min: {self.min_matches}, Max: {self.max_matches} "
            f"{'✓' if self.match_spread <= 1 else '✗'}",
            "Home games per club:",
            f"  Min: {self.min_home_games}, Max: {self.max_home_games}",
            "Opponents:",
            f"  Unique opponents: min={self.min_unique_opponents}, max={self.max_unique_opponents}",
            f"  Pairs meeting more than once: {self.repeat_pairs} (most meetings: {self.max_meetings})",
            "Byes per club:",
            f"  Min: {self.min_byes}, Max: {self.max_byes}",
            f"Blockbusters placed: {self.blockbusters_placed}",
            "=" * 40,
        ]
        return "\n".join(lines)


def compute_unique_opponents(season: Season, club_id: str) -> int:
    """Count distinct opponents a club meets in the regular season."""
    opponents: set[str] = set()
    for fixture in season.get_fixtures_for_club(club_id):
        if fixture.home_club_id == club_id:
            opponents.add(fixture.away_club_id)
        else:
            opponents.add(fixture.home_club_id)
    return len(opponents)


def count_home_games(season: Season, club_id: str) -> int:
    return sum(1 for f in season.get_fixtures_for_club(club_id) if f.home_club_id == club_id)


def count_byes(season: Season, club_id: str) -> int:
    return sum(1 for r in season.rounds if club_id in r.bye_club_ids)


def calculate_metrics(season: Season, club_ids: list[str]) -> ScheduleMetrics:
    """Calculate all quality metrics for a season."""
    matches = season.match_counts(club_ids)
    home_games = [count_home_games(season, c) for c in club_ids]
    unique_opponents = [compute_unique_opponents(season, c) for c in club_ids]
    byes = [count_byes(season, c) for c in club_ids]

    meetings: Counter[tuple[str, str]] = count_meetings(season.rounds)
    blockbusters = sum(1 for r in season.rounds for f in r.fixtures if f.is_blockbuster)

    return ScheduleMetrics(
        min_matches=min(matches.values(), default=0),
        max_matches=max(matches.values(), default=0),
        min_home_games=min(home_games, default=0),
        max_home_games=max(home_games, default=0),
        min_unique_opponents=min(unique_opponents, default=0),
        max_unique_opponents=max(unique_opponents, default=0),
        repeat_pairs=sum(1 for n in meetings.values() if n > 1),
        max_meetings=max(meetings.values(), default=0),
        min_byes=min(byes, default=0),
        max_byes=max(byes, default=0),
        blockbusters_placed=blockbusters,
    )
