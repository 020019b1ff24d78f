"""
Shared test fixtures.

Provides club maps of any size, a sample ladder and helpers for building
finals results.
"""

import pytest

from season_scheduler.models import Club, FinalType, LadderEntry, MatchResult


def build_clubs(count: int, large: int = 0) -> dict[str, Club]:
    """Clubs club00..clubNN; the first `large` are large-tier."""
    return {
        f"club{i:02d}": Club(
            id=f"club{i:02d}",
            name=f"Club {i}",
            home_ground=f"Ground {i}",
            tier="large" if i < large else "medium",
        )
        for i in range(count)
    }


def build_ladder(club_ids: list[str]) -> list[LadderEntry]:
    """Ladder in the given order, best first."""
    return [
        LadderEntry(club_id=club_id, points=4 * (len(club_ids) - i))
        for i, club_id in enumerate(club_ids)
    ]


def final_result(
    week: int,
    index: int,
    home: str,
    away: str,
    home_score: int,
    away_score: int,
    final_type: FinalType | None = None,
) -> MatchResult:
    return MatchResult(
        round_number=week,
        match_index=index,
        home_club_id=home,
        away_club_id=away,
        home_score=home_score,
        away_score=away_score,
        is_final=True,
        final_type=final_type,
    )


# =============================================================================
# CLUB FIXTURES
# =============================================================================

@pytest.fixture
def make_clubs():
    """Factory for club maps of a given size."""
    return build_clubs


@pytest.fixture
def clubs18() -> dict[str, Club]:
    return build_clubs(18)


@pytest.fixture
def clubs10() -> dict[str, Club]:
    return build_clubs(10)


# =============================================================================
# FINALS FIXTURES
# =============================================================================

@pytest.fixture
def ladder18(clubs18) -> list[LadderEntry]:
    """club00 on top down to club17 at the bottom."""
    return build_ladder(list(clubs18))
