"""Data models for the season scheduler."""

from dataclasses import dataclass, field, replace
from enum import Enum

from .exceptions import FinalsFormatError


class FinalType(Enum):
    """Bracket role of a finals match."""
    QUALIFYING = "QF"
    ELIMINATION = "EF"
    SEMI = "SF"
    PRELIMINARY = "PF"
    GRAND = "GF"


class Outcome(Enum):
    """Which side of a completed match a team source takes."""
    WINNER = "winner"
    LOSER = "loser"


class SourceKind(Enum):
    LADDER = "ladder"
    RESULT = "result"


@dataclass(frozen=True)
class Club:
    """A club in the league."""
    id: str
    name: str
    home_ground: str
    tier: str = "medium"


@dataclass(frozen=True)
class MatchSlot:
    """A day/time slot a fixture can be scheduled into."""
    id: str
    day: str
    time: str
    enabled: bool = True


@dataclass(frozen=True)
class Fixture:
    """
    A single match between two clubs.

    Home and away must differ; the validator reports a fixture that breaks
    this rather than the constructor refusing it.
    """
    home_club_id: str
    away_club_id: str
    venue: str
    match_day: str | None = None
    scheduled_time: str | None = None
    is_blockbuster: bool = False
    blockbuster_name: str | None = None
    final_type: FinalType | None = None
    label: str | None = None
    match_index: int | None = None

    @property
    def club_ids(self) -> tuple[str, str]:
        return (self.home_club_id, self.away_club_id)

    def involves(self, club_id: str) -> bool:
        return club_id == self.home_club_id or club_id == self.away_club_id

    def is_between(self, club_a: str, club_b: str) -> bool:
        """True if this fixture is club_a v club_b in either direction."""
        return {self.home_club_id, self.away_club_id} == {club_a, club_b}

    def with_slot(self, day: str | None, time: str | None) -> "Fixture":
        return replace(self, match_day=day, scheduled_time=time)


@dataclass(frozen=True)
class Round:
    """
    One round of the season.

    A club appears in at most one fixture per round and is never both
    fixtured and on bye.
    """
    number: int
    name: str
    fixtures: tuple[Fixture, ...] = ()
    is_bye: bool = False
    bye_club_ids: frozenset[str] = frozenset()
    is_finals: bool = False

    @property
    def club_ids(self) -> list[str]:
        """Every club fixtured this round, in fixture order."""
        return [club_id for f in self.fixtures for club_id in f.club_ids]


@dataclass
class Season:
    """A complete season: regular rounds plus finals rounds played so far."""
    year: int
    rounds: list[Round]
    finals_rounds: list[Round] = field(default_factory=list)

    def get_round(self, number: int) -> Round:
        for round_ in self.rounds:
            if round_.number == number:
                return round_
        raise KeyError(f"Season {self.year} has no round {number}")

    def get_fixtures_for_club(self, club_id: str) -> list[Fixture]:
        """All regular-season fixtures involving a club, in round order."""
        return [
            fixture
            for round_ in self.rounds
            for fixture in round_.fixtures
            if fixture.involves(club_id)
        ]

    def match_counts(self, club_ids: list[str]) -> dict[str, int]:
        """Regular-season match count per club."""
        counts = {club_id: 0 for club_id in club_ids}
        for round_ in self.rounds:
            if round_.is_finals:
                continue
            for fixture in round_.fixtures:
                for club_id in fixture.club_ids:
                    counts[club_id] = counts.get(club_id, 0) + 1
        return counts

    def add_finals_round(self, finals_round: Round) -> None:
        """
        Append the next finals week. Weeks must arrive in order.

        Adding the latest week again replaces it, so a week resolved before
        all of its dependencies were played can be filled in later.
        """
        if self.finals_rounds and finals_round.number == self.finals_rounds[-1].number:
            self.finals_rounds[-1] = finals_round
            return
        expected = len(self.finals_rounds) + 1
        if finals_round.number != expected:
            raise ValueError(
                f"Expected finals week {expected}, got {finals_round.number}"
            )
        self.finals_rounds.append(finals_round)


@dataclass
class LadderEntry:
    """One club's line on the ladder."""
    club_id: str
    played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    points: int = 0
    points_for: int = 0
    points_against: int = 0
    percentage: float = 0.0


@dataclass(frozen=True)
class MatchResult:
    """
    A match as reported back by the match engine.

    For finals, round_number is the finals week and match_index is the
    0-based position of the matchup within that week. Scores are None
    until the match has been played.
    """
    round_number: int
    match_index: int
    home_club_id: str
    away_club_id: str
    home_score: int | None = None
    away_score: int | None = None
    is_final: bool = False
    final_type: FinalType | None = None

    @property
    def is_played(self) -> bool:
        return self.home_score is not None and self.away_score is not None


@dataclass(frozen=True)
class TeamSource:
    """Where a finals team comes from: a ladder rank or a prior result."""
    kind: SourceKind
    rank: int | None = None
    week: int | None = None
    match: int | None = None
    outcome: Outcome | None = None

    @classmethod
    def from_ladder(cls, rank: int) -> "TeamSource":
        return cls(kind=SourceKind.LADDER, rank=rank)

    @classmethod
    def from_result(cls, week: int, match: int, outcome: Outcome) -> "TeamSource":
        return cls(kind=SourceKind.RESULT, week=week, match=match, outcome=outcome)

    def __str__(self) -> str:
        if self.kind is SourceKind.LADDER:
            return f"ladder #{self.rank}"
        return f"{self.outcome.value} of week {self.week} match {self.match}"


@dataclass(frozen=True)
class Matchup:
    """A finals matchup rule within a week."""
    label: str
    final_type: FinalType
    home: TeamSource
    away: TeamSource
    is_elimination: bool = True


@dataclass(frozen=True)
class FinalsWeek:
    number: int
    label: str
    matchups: tuple[Matchup, ...]

    @property
    def has_grand_final(self) -> bool:
        return any(m.final_type is FinalType.GRAND for m in self.matchups)


@dataclass(frozen=True)
class FinalsFormat:
    """A declarative finals bracket."""
    id: str
    name: str
    qualifying_teams: int
    weeks: tuple[FinalsWeek, ...]
    description: str = ""
    grand_final_venue: str = "MCG"

    def week(self, number: int) -> FinalsWeek:
        for week in self.weeks:
            if week.number == number:
                return week
        raise FinalsFormatError(
            f"Finals format '{self.id}' has no week {number} "
            f"(weeks 1-{len(self.weeks)})"
        )

    def matchup(self, week_number: int, index: int) -> Matchup:
        week = self.week(week_number)
        if not 0 <= index < len(week.matchups):
            raise FinalsFormatError(
                f"Finals format '{self.id}' week {week_number} has no match {index}"
            )
        return week.matchups[index]


@dataclass(frozen=True)
class BlockbusterSpec:
    """
    A marquee fixture pinned to a round, venue and time slot.

    target_round of None means the round comes from the auto-round table.
    """
    id: str
    name: str
    home_club_id: str
    away_club_id: str
    venue: str
    scheduled_day: str
    scheduled_time: str
    target_round: int | None = None
    enabled: bool = True
    kind: str = "event"
