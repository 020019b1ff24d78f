"""
Season generation.

One attempt runs the whole pipeline from a single seed: plan byes, build
round-robin rounds, top up with balanced repeat rounds, interleave the bye
rounds, give every fixture a time slot, place blockbusters and validate.
Attempts that fail validation are retried from scratch with the next seed,
and the cleanest attempt wins.
"""

import logging
from dataclasses import dataclass, field

from .assembler import assemble_rounds
from .blockbusters import place_blockbusters
from .byes import byes_apply, compute_bye_groups, compute_bye_round_indices
from .config import MAX_GENERATION_ATTEMPTS, GeneratorOptions
from .exceptions import InsufficientClubsError
from .match_days import apply_prime_time_bias, schedule_season_days
from .models import Round, Season
from .repeat_rounds import generate_balanced_repeat_rounds
from .rng import SeededRNG
from .round_robin import generate_round_robin_rounds
from .validator import Violation, dropped_fixture_violations, validate_fixture

logger = logging.getLogger(__name__)


@dataclass
class GenerationAttempt:
    """One run of the pipeline."""
    attempt: int
    seed: int
    season: Season
    violations: list[Violation] = field(default_factory=list)
    blockbusters_placed: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.violations


@dataclass
class GenerationResult:
    """
    The chosen season plus every attempt that led to it.

    season and violations belong to the attempt with the fewest violations;
    attempts keeps them all, in order, for diagnostics.
    """
    season: Season
    violations: list[Violation]
    attempts: list[GenerationAttempt]

    @property
    def is_clean(self) -> bool:
        return not self.violations


def build_rounds(options: GeneratorOptions, rng: SeededRNG) -> tuple[list[Round], list[str]]:
    """
    Build the regular-season rounds for one attempt, before blockbusters.

    Returns the rounds and the club ids in league order.
    """
    settings = options.resolved_settings()
    structure = settings.season_structure
    club_ids = list(options.clubs)
    target_rounds = structure.regular_season_rounds

    use_byes = byes_apply(
        len(club_ids), target_rounds, structure.bye_rounds, structure.bye_round_count,
    )
    if use_byes:
        bye_groups = compute_bye_groups(club_ids, structure.bye_round_count, rng)
        bye_round_indices = compute_bye_round_indices(target_rounds, structure.bye_round_count)
        target_full_rounds = target_rounds - structure.bye_round_count
    else:
        bye_groups = None
        bye_round_indices = None
        target_full_rounds = target_rounds

    full_rounds = generate_round_robin_rounds(club_ids, options.clubs, rng, target_full_rounds)
    if len(full_rounds) < target_full_rounds:
        full_rounds += generate_balanced_repeat_rounds(
            club_ids, full_rounds, target_full_rounds, options.clubs, rng,
        )

    rounds = assemble_rounds(
        full_rounds, club_ids, options.clubs, rng, target_rounds,
        bye_groups=bye_groups, bye_round_indices=bye_round_indices,
    )
    rounds = schedule_season_days(
        rounds, options.requesting_club_id, rng, settings.enabled_slots,
    )
    return rounds, club_ids


def run_attempt(options: GeneratorOptions, attempt: int) -> GenerationAttempt:
    """Run the full pipeline once with seed + attempt."""
    settings = options.resolved_settings()
    seed = options.seed + attempt
    rng = SeededRNG(seed)

    rounds, club_ids = build_rounds(options, rng)

    violations: list[Violation] = []
    placed: list[str] = []
    if settings.blockbuster_placement and settings.blockbusters and rounds:
        placement = place_blockbusters(
            rounds,
            list(settings.blockbusters),
            options.clubs,
            rng,
            settings.enabled_slots,
            options.requesting_club_id,
        )
        rounds = placement.rounds
        placed = placement.placed
        violations.extend(dropped_fixture_violations(placement.dropped))

    if settings.prime_time_bias:
        rounds = apply_prime_time_bias(rounds, options.clubs, rng)

    violations = validate_fixture(rounds, club_ids) + violations

    return GenerationAttempt(
        attempt=attempt,
        seed=seed,
        season=Season(year=settings.year, rounds=rounds),
        violations=violations,
        blockbusters_placed=placed,
    )


def generate_season(options: GeneratorOptions) -> GenerationResult:
    """
    Generate a season, retrying with a fresh seed while violations remain.

    Raises:
        InsufficientClubsError: fewer than two clubs
    """
    if len(options.clubs) < 2:
        raise InsufficientClubsError(
            f"Need at least 2 clubs to generate a season, got {len(options.clubs)}"
        )

    attempts: list[GenerationAttempt] = []
    for attempt in range(MAX_GENERATION_ATTEMPTS):
        result = run_attempt(options, attempt)
        attempts.append(result)
        if result.is_clean:
            logger.info("Attempt %d (seed %d) produced a clean season", attempt + 1, result.seed)
            break
        logger.info(
            "Attempt %d (seed %d) had %d violation(s)",
            attempt + 1, result.seed, len(result.violations),
        )

    # min keeps the earliest attempt on ties
    best = min(attempts, key=lambda a: len(a.violations))
    if not best.is_clean:
        logger.warning(
            "No clean season after %d attempts; using attempt %d with %d violation(s)",
            len(attempts), best.attempt + 1, len(best.violations),
        )

    return GenerationResult(season=best.season, violations=best.violations, attempts=attempts)


def generate_fixture(options: GeneratorOptions) -> Season:
    """Generate a season and return only the schedule."""
    return generate_season(options).season
