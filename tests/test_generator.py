"""
Tests for the generation pipeline and retry loop.
"""

import logging
from pathlib import Path

import pytest

from season_scheduler import generator
from season_scheduler.config import (
    DEFAULT_BLOCKBUSTERS,
    MAX_GENERATION_ATTEMPTS,
    GeneratorOptions,
    SchedulerSettings,
    SeasonStructure,
)
from season_scheduler.exceptions import InsufficientClubsError
from season_scheduler.generator import GenerationAttempt, generate_fixture, generate_season
from season_scheduler.models import Club, Season
from season_scheduler.schemas import load_clubs
from season_scheduler.validator import Violation, ViolationKind

AFL_CLUBS_FILE = Path(__file__).parent.parent / "scripts" / "afl_clubs.json"


def test_same_seed_same_season(clubs18) -> None:
    first = generate_fixture(GeneratorOptions(clubs=clubs18, seed=99))
    second = generate_fixture(GeneratorOptions(clubs=clubs18, seed=99))
    assert first == second


def test_different_seed_different_season(clubs18) -> None:
    first = generate_fixture(GeneratorOptions(clubs=clubs18, seed=1))
    second = generate_fixture(GeneratorOptions(clubs=clubs18, seed=2))
    assert first.rounds != second.rounds


def test_default_settings_build_23_rounds_with_byes(clubs18) -> None:
    result = generate_season(GeneratorOptions(clubs=clubs18, seed=5))
    season = result.season

    assert result.is_clean
    assert len(result.attempts) == 1
    assert len(season.rounds) == 23
    assert season.year == 2026
    assert [r.number for r in season.rounds] == list(range(1, 24))
    bye_rounds = [r for r in season.rounds if r.is_bye]
    assert len(bye_rounds) == 3
    assert sorted(c for r in bye_rounds for c in r.bye_club_ids) == sorted(clubs18)


def test_every_fixture_is_scheduled(clubs18) -> None:
    season = generate_fixture(GeneratorOptions(clubs=clubs18, seed=3, requesting_club_id="club04"))
    for round_ in season.rounds:
        for f in round_.fixtures:
            assert f.match_day and f.scheduled_time
            if f.involves("club04") and not f.is_blockbuster:
                assert f.match_day == "Saturday-Twilight"


def test_fewer_than_two_clubs_raises(make_clubs) -> None:
    with pytest.raises(InsufficientClubsError):
        generate_season(GeneratorOptions(clubs=make_clubs(1), seed=1))
    with pytest.raises(ValueError):
        generate_season(GeneratorOptions(clubs={}, seed=1))


def test_zero_rounds_gives_empty_season(clubs10) -> None:
    settings = SchedulerSettings(season_structure=SeasonStructure(regular_season_rounds=0))
    result = generate_season(GeneratorOptions(clubs=clubs10, seed=1, settings=settings))
    assert result.season == Season(year=2026, rounds=[])
    assert result.violations == []


def test_odd_club_count_without_byes(make_clubs) -> None:
    clubs = make_clubs(9)
    settings = SchedulerSettings(season_structure=SeasonStructure(regular_season_rounds=12))
    result = generate_season(GeneratorOptions(clubs=clubs, seed=4, settings=settings))

    assert result.is_clean
    assert not any(r.is_bye for r in result.season.rounds)
    counts = result.season.match_counts(list(clubs)).values()
    assert max(counts) - min(counts) <= 1


def test_default_blockbusters_on_afl_clubs() -> None:
    clubs = load_clubs(AFL_CLUBS_FILE.read_text())
    settings = SchedulerSettings(blockbusters=DEFAULT_BLOCKBUSTERS)
    result = generate_season(GeneratorOptions(clubs=clubs, seed=2026, settings=settings))

    # Moves that would break a round are abandoned, so the season holds together
    assert result.is_clean
    season = result.season
    for round_ in season.rounds:
        assert len(round_.club_ids) == len(set(round_.club_ids))
        assert not round_.bye_club_ids & set(round_.club_ids)

    openers = [
        (r.number, f) for r in season.rounds for f in r.fixtures
        if f.blockbuster_name == "Round 1 Opener"
    ]
    assert len(openers) <= 1
    for number, f in openers:
        assert number == 1
        assert f.is_between("carlton", "richmond")
        assert (f.venue, f.match_day) == ("MCG", "Thursday")


def _fake_attempts(violation_counts: list[int]):
    """Stand-in for run_attempt returning attempts with given violation counts."""
    calls = []

    def fake_run_attempt(options: GeneratorOptions, attempt: int) -> GenerationAttempt:
        calls.append(attempt)
        count = violation_counts[attempt]
        return GenerationAttempt(
            attempt=attempt,
            seed=options.seed + attempt,
            season=Season(year=2026, rounds=[]),
            violations=[Violation(ViolationKind.MATCH_IMBALANCE, f"#{attempt}")] * count,
        )

    return fake_run_attempt, calls


def test_retry_stops_at_first_clean_attempt(monkeypatch, clubs10) -> None:
    fake, calls = _fake_attempts([2, 0, 1])
    monkeypatch.setattr(generator, "run_attempt", fake)

    result = generate_season(GeneratorOptions(clubs=clubs10, seed=10))

    assert calls == [0, 1]
    assert result.is_clean
    assert [a.seed for a in result.attempts] == [10, 11]


def test_retry_returns_fewest_violations(monkeypatch, caplog, clubs10) -> None:
    fake, calls = _fake_attempts([3, 1, 1])
    monkeypatch.setattr(generator, "run_attempt", fake)

    with caplog.at_level(logging.WARNING, logger="season_scheduler.generator"):
        result = generate_season(GeneratorOptions(clubs=clubs10, seed=0))

    assert calls == list(range(MAX_GENERATION_ATTEMPTS))
    assert len(result.attempts) == 3
    # Earliest of the tied attempts wins
    assert [v.message for v in result.violations] == ["#1"]
    assert "No clean season after 3 attempts" in caplog.text


def test_attempts_use_incrementing_seeds(clubs10) -> None:
    """Attempt N is exactly the pipeline run with seed + N."""
    options = GeneratorOptions(clubs=clubs10, seed=20)
    retry = generator.run_attempt(options, 2)
    direct = generator.run_attempt(GeneratorOptions(clubs=clubs10, seed=22), 0)
    assert retry.seed == direct.seed == 22
    assert retry.season == direct.season


def test_two_clubs_meet_every_round() -> None:
    clubs = {
        "b": Club("b", "B", "B Park"),
        "a": Club("a", "A", "A Park"),
    }
    settings = SchedulerSettings(season_structure=SeasonStructure(regular_season_rounds=2))
    result = generate_season(GeneratorOptions(clubs=clubs, seed=1, settings=settings))
    assert result.season.match_counts(["a", "b"]) == {"a": 2, "b": 2}
