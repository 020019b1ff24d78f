"""
External configuration schemas.

Pydantic models for settings that arrive as JSON or plain dicts, such as a
saved game's settings or a user-built finals format. Field names accept
both snake_case and the camelCase used in saved settings. Each loader
returns the plain dataclasses the scheduler works with.
"""

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .config import (
    DEFAULT_MATCH_SLOTS,
    DEFAULT_SEASON_YEAR,
    GF_VENUES,
    FinalsSettings,
    GrandFinalVenueMode,
    LadderPoints,
    SchedulerSettings,
    SeasonStructure,
)
from .exceptions import FinalsFormatError
from .finals_formats import check_finals_format
from .models import (
    BlockbusterSpec,
    Club,
    FinalsFormat,
    FinalsWeek,
    FinalType,
    Matchup,
    MatchSlot,
    Outcome,
    TeamSource,
)


class _Schema(BaseModel):
    """Base for all schemas."""

    model_config = ConfigDict(populate_by_name=True)


class TeamSourceSchema(_Schema):
    type: Literal["ladder", "result"]
    rank: int | None = None
    week_ref: int | None = Field(default=None, alias="weekRef")
    match_ref: int | None = Field(default=None, alias="matchRef")
    outcome: Literal["winner", "loser"] | None = None

    @model_validator(mode="after")
    def _check_reference(self) -> "TeamSourceSchema":
        if self.type == "ladder" and self.rank is None:
            raise ValueError("ladder source needs a rank")
        if self.type == "result" and (
            self.week_ref is None or self.match_ref is None or self.outcome is None
        ):
            raise ValueError("result source needs weekRef, matchRef and outcome")
        return self

    def to_source(self) -> TeamSource:
        if self.type == "ladder":
            return TeamSource.from_ladder(self.rank)
        return TeamSource.from_result(self.week_ref, self.match_ref, Outcome(self.outcome))


class MatchupSchema(_Schema):
    label: str
    final_type: Literal["QF", "EF", "SF", "PF", "GF"] = Field(alias="finalType")
    home: TeamSourceSchema
    away: TeamSourceSchema
    is_elimination: bool = Field(default=True, alias="isElimination")

    def to_matchup(self) -> Matchup:
        return Matchup(
            label=self.label,
            final_type=FinalType(self.final_type),
            home=self.home.to_source(),
            away=self.away.to_source(),
            is_elimination=self.is_elimination,
        )


class FinalsWeekSchema(_Schema):
    week_number: int = Field(alias="weekNumber")
    label: str
    matchups: list[MatchupSchema]


class FinalsFormatSchema(_Schema):
    id: str
    name: str
    description: str = ""
    qualifying_teams: int = Field(alias="qualifyingTeams", ge=2)
    grand_final_venue: str = Field(default="MCG", alias="grandFinalVenue")
    weeks: list[FinalsWeekSchema]

    def to_format(self) -> FinalsFormat:
        return FinalsFormat(
            id=self.id,
            name=self.name,
            qualifying_teams=self.qualifying_teams,
            weeks=tuple(
                FinalsWeek(
                    number=week.week_number,
                    label=week.label,
                    matchups=tuple(m.to_matchup() for m in week.matchups),
                )
                for week in self.weeks
            ),
            description=self.description,
            grand_final_venue=self.grand_final_venue,
        )


class BlockbusterSchema(_Schema):
    id: str
    name: str
    home_club_id: str = Field(alias="homeClubId")
    away_club_id: str = Field(alias="awayClubId")
    venue: str
    scheduled_day: str = Field(alias="scheduledDay")
    scheduled_time: str = Field(alias="scheduledTime")
    target_round: int | Literal["auto"] | None = Field(default="auto", alias="targetRound")
    enabled: bool = True
    kind: str = Field(default="event", alias="type")

    def to_spec(self) -> BlockbusterSpec:
        return BlockbusterSpec(
            id=self.id,
            name=self.name,
            home_club_id=self.home_club_id,
            away_club_id=self.away_club_id,
            venue=self.venue,
            scheduled_day=self.scheduled_day,
            scheduled_time=self.scheduled_time,
            target_round=None if self.target_round in (None, "auto") else self.target_round,
            enabled=self.enabled,
            kind=self.kind,
        )


class MatchSlotSchema(_Schema):
    id: str
    day: str
    time: str
    enabled: bool = True


class SeasonStructureSchema(_Schema):
    regular_season_rounds: int = Field(default=23, alias="regularSeasonRounds", ge=0)
    bye_rounds: bool = Field(default=True, alias="byeRounds")
    bye_round_count: int = Field(default=3, alias="byeRoundCount", ge=0)


class FinalsSettingsSchema(_Schema):
    format_id: str = Field(default="afl-top-8", alias="finalsFormat")
    grand_final_venue_mode: GrandFinalVenueMode = Field(
        default=GrandFinalVenueMode.FIXED, alias="grandFinalVenueMode",
    )
    grand_final_venue: str = Field(default="MCG", alias="grandFinalVenue")
    venue_pool: list[str] = Field(default_factory=lambda: list(GF_VENUES), alias="venuePool")
    custom_format: FinalsFormatSchema | None = Field(default=None, alias="customFormat")


class LadderPointsSchema(_Schema):
    win: int = 4
    draw: int = 2
    loss: int = 0


class SettingsSchema(_Schema):
    season_structure: SeasonStructureSchema = Field(
        default_factory=SeasonStructureSchema, alias="seasonStructure",
    )
    match_slots: list[MatchSlotSchema] | None = Field(default=None, alias="matchSlots")
    blockbusters: list[BlockbusterSchema] = Field(default_factory=list)
    blockbuster_placement: bool = Field(default=True, alias="blockbusterPlacement")
    prime_time_bias: bool = Field(default=False, alias="primeTimeBias")
    finals: FinalsSettingsSchema = Field(default_factory=FinalsSettingsSchema)
    ladder_points: LadderPointsSchema = Field(
        default_factory=LadderPointsSchema, alias="ladderPoints",
    )
    year: int = DEFAULT_SEASON_YEAR


class ClubSchema(_Schema):
    id: str
    name: str
    home_ground: str = Field(alias="homeGround")
    tier: Literal["small", "medium", "large"] = "medium"


def _parse(data: Any) -> Any:
    """Accept either decoded data or a JSON string."""
    if isinstance(data, (str, bytes)):
        return json.loads(data)
    return data


def load_finals_format(data: Any) -> FinalsFormat:
    """
    Parse and check a finals format.

    Raises:
        FinalsFormatError: the data does not match the schema, or the
            bracket it describes is not usable
    """
    try:
        schema = FinalsFormatSchema.model_validate(_parse(data))
    except (ValidationError, ValueError) as e:
        raise FinalsFormatError(f"Invalid finals format: {e}") from e
    return check_finals_format(schema.to_format())


def load_blockbusters(data: Any) -> list[BlockbusterSpec]:
    return [BlockbusterSchema.model_validate(item).to_spec() for item in _parse(data)]


def load_clubs(data: Any) -> dict[str, Club]:
    """Clubs keyed by id, in the order given."""
    clubs: dict[str, Club] = {}
    for item in _parse(data):
        schema = ClubSchema.model_validate(item)
        clubs[schema.id] = Club(
            id=schema.id, name=schema.name, home_ground=schema.home_ground, tier=schema.tier,
        )
    return clubs


def load_settings(data: Any) -> SchedulerSettings:
    """
    Parse full scheduler settings.

    Missing sections fall back to the defaults. A custom finals format is
    checked as it is loaded.

    Raises:
        pydantic.ValidationError: the data does not match the schema
        FinalsFormatError: the custom finals format is not usable
    """
    schema = SettingsSchema.model_validate(_parse(data))

    structure = schema.season_structure
    finals = schema.finals
    custom_format = None
    if finals.custom_format is not None:
        custom_format = check_finals_format(finals.custom_format.to_format())

    if schema.match_slots is None:
        match_slots = DEFAULT_MATCH_SLOTS
    else:
        match_slots = tuple(
            MatchSlot(id=s.id, day=s.day, time=s.time, enabled=s.enabled)
            for s in schema.match_slots
        )

    return SchedulerSettings(
        season_structure=SeasonStructure(
            regular_season_rounds=structure.regular_season_rounds,
            bye_rounds=structure.bye_rounds,
            bye_round_count=structure.bye_round_count,
        ),
        match_slots=match_slots,
        blockbusters=tuple(b.to_spec() for b in schema.blockbusters),
        blockbuster_placement=schema.blockbuster_placement,
        prime_time_bias=schema.prime_time_bias,
        finals=FinalsSettings(
            format_id=finals.format_id,
            grand_final_venue_mode=finals.grand_final_venue_mode,
            grand_final_venue=finals.grand_final_venue,
            venue_pool=tuple(finals.venue_pool),
            custom_format=custom_format,
        ),
        ladder_points=LadderPoints(
            win=schema.ladder_points.win,
            draw=schema.ladder_points.draw,
            loss=schema.ladder_points.loss,
        ),
        year=schema.year,
    )
