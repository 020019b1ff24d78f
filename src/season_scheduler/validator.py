"""
Fixture validation.

These checks verify that a generated season satisfies the structural rules
every schedule must keep: nobody plays themselves, nobody plays twice in a
round, resting clubs are not fixtured, every fixture has a venue, and match
counts stay within one of each other. Findings are returned as values and
never raised, so a whole season's problems can be collected and logged.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from .models import Fixture, Round


class ViolationKind(Enum):
    SELF_PLAY = "self-play"
    DUPLICATE_IN_ROUND = "duplicate-in-round"
    BYE_CONFLICT = "bye-conflict"
    MISSING_VENUE = "missing-venue"
    MATCH_IMBALANCE = "match-imbalance"
    DROPPED_FIXTURE = "dropped-fixture"


@dataclass(frozen=True)
class Violation:
    """A single problem found in a schedule."""
    kind: ViolationKind
    message: str
    round_number: int | None = None


@dataclass
class ValidationReport:
    """All violations found in a schedule."""
    violations: list[Violation] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations

    def by_kind(self) -> dict[ViolationKind, list[Violation]]:
        grouped: dict[ViolationKind, list[Violation]] = {kind: [] for kind in ViolationKind}
        for violation in self.violations:
            grouped[violation.kind].append(violation)
        return grouped

    def __str__(self) -> str:
        lines = ["Fixture Validation Report", "=" * 40]
        for kind, found in self.by_kind().items():
            status = "✓ PASS" if not found else "✗ FAIL"
            lines.append(f"{status}: {kind.value}")
            for violation in found[:3]:
                lines.append(f"       {violation.message}")
            if len(found) > 3:
                lines.append(f"       (+{len(found) - 3} more)")
        lines.append("=" * 40)
        lines.append(f"Overall: {'PASSED' if self.passed else 'FAILED'}")
        return "\n".join(lines)


def check_self_play(round_: Round) -> list[Violation]:
    return [
        Violation(
            ViolationKind.SELF_PLAY,
            f"Round {round_.number}: {f.home_club_id} plays itself",
            round_.number,
        )
        for f in round_.fixtures
        if f.home_club_id == f.away_club_id
    ]


def check_duplicates_in_round(round_: Round) -> list[Violation]:
    """A club listed in more than one fixture of the same round."""
    counts = Counter(round_.club_ids)
    return [
        Violation(
            ViolationKind.DUPLICATE_IN_ROUND,
            f"Round {round_.number}: {club_id} appears more than once",
            round_.number,
        )
        for club_id, count in counts.items()
        if count > 1
    ]


def check_bye_conflicts(round_: Round) -> list[Violation]:
    fixtured = set(round_.club_ids)
    return [
        Violation(
            ViolationKind.BYE_CONFLICT,
            f"Round {round_.number}: {club_id} is on bye but has a fixture",
            round_.number,
        )
        for club_id in sorted(round_.bye_club_ids)
        if club_id in fixtured
    ]


def check_venues(round_: Round) -> list[Violation]:
    return [
        Violation(
            ViolationKind.MISSING_VENUE,
            f"Round {round_.number}: {f.home_club_id} vs {f.away_club_id} has no venue",
            round_.number,
        )
        for f in round_.fixtures
        if not f.venue
    ]


def check_match_balance(rounds: list[Round], club_ids: list[str]) -> list[Violation]:
    """
    Every club should play within one match of every other club.

    Only regular-season rounds count. Clubs with no fixtures count as zero.
    """
    counts = {club_id: 0 for club_id in club_ids}
    for round_ in rounds:
        if round_.is_finals:
            continue
        for club_id in round_.club_ids:
            counts[club_id] = counts.get(club_id, 0) + 1

    if not counts:
        return []

    max_count = max(counts.values())
    min_count = min(counts.values())
    if max_count - min_count <= 1:
        return []

    busiest = [c for c, n in counts.items() if n == max_count][:3]
    quietest = [c for c, n in counts.items() if n == min_count][:3]
    return [Violation(
        ViolationKind.MATCH_IMBALANCE,
        f"Match count imbalance: max={max_count} ({', '.join(busiest)}), "
        f"min={min_count} ({', '.join(quietest)})",
    )]


def dropped_fixture_violations(dropped: list[tuple[int, Fixture]]) -> list[Violation]:
    """Report fixtures removed while repairing a schedule."""
    return [
        Violation(
            ViolationKind.DROPPED_FIXTURE,
            f"Round {round_number}: {f.home_club_id} vs {f.away_club_id} was removed "
            f"to keep clubs unique",
            round_number,
        )
        for round_number, f in dropped
    ]


def validate_fixture(rounds: list[Round], club_ids: list[str]) -> list[Violation]:
    """
    Run every check over a season's rounds.

    Per-round checks skip finals rounds. Returns violations in round order,
    followed by any season-wide imbalance.
    """
    violations: list[Violation] = []
    for round_ in rounds:
        if round_.is_finals:
            continue
        violations.extend(check_self_play(round_))
        violations.extend(check_duplicates_in_round(round_))
        violations.extend(check_bye_conflicts(round_))
        violations.extend(check_venues(round_))
    violations.extend(check_match_balance(rounds, club_ids))
    return violations


def validate_season(rounds: list[Round], club_ids: list[str]) -> ValidationReport:
    return ValidationReport(violations=validate_fixture(rounds, club_ids))
