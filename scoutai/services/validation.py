"""
Field validation for scouting entities.

Every entity has an explicit validation function returning the list of
violated rules. The repository layer runs these before any insert or update
so that invalid rows never reach the database.

Rules:
- not_blank: required string is missing, empty or whitespace
- not_null: required value is missing
- size: string length outside the allowed range (includes column limits)
- min / max: numeric value outside the allowed range
- pattern: value not in the accepted set
- past: date is not strictly before today

Optional fields that are None skip every rule except not_null/not_blank.
"""
import logging
from dataclasses import dataclass, field as dataclass_field
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from scoutai.core.exceptions import EntityValidationError
from scoutai.models import (
    Foot,
    League,
    Player,
    PlayerMatchdayStats,
    PlayerSeasonStats,
    Position,
    PositionGroup,
    Season,
    Team,
)
from scoutai.utils.timezone import utc_today

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Violation:
    """A single failed constraint."""
    field: str
    rule: str
    message: str


@dataclass
class ValidationResult:
    """Violations collected for one entity."""
    entity: str
    violations: List[Violation] = dataclass_field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def add(self, field: str, rule: str, message: str):
        """Record a violation."""
        self.violations.append(Violation(field, rule, message))

    def extend(self, violations: List[Violation]):
        self.violations.extend(violations)

    def raise_for_violations(self):
        """Raise EntityValidationError if anything was recorded."""
        if self.violations:
            raise EntityValidationError(self.entity, self.violations)

    def __repr__(self):
        return f"ValidationResult(entity={self.entity}, violations={len(self.violations)})"


# =============================================================================
# RULE HELPERS
# =============================================================================

def _not_blank(result: ValidationResult, field: str, value: Optional[str], message: str):
    if value is None or not str(value).strip():
        result.add(field, "not_blank", message)


def _not_null(result: ValidationResult, field: str, value: Any, message: str):
    if value is None:
        result.add(field, "not_null", message)


def _size(
    result: ValidationResult,
    field: str,
    value: Optional[str],
    max_length: int,
    min_length: int = 0,
    message: Optional[str] = None,
):
    if value is None:
        return
    if not (min_length <= len(value) <= max_length):
        if message is None:
            message = f"{field} cannot exceed {max_length} characters"
        result.add(field, "size", message)


def _range(
    result: ValidationResult,
    field: str,
    value: Optional[int],
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
    min_message: str = "",
    max_message: str = "",
):
    if value is None:
        return
    if minimum is not None and value < minimum:
        result.add(field, "min", min_message or f"{field} must be at least {minimum}")
    if maximum is not None and value > maximum:
        result.add(field, "max", max_message or f"{field} cannot exceed {maximum}")


def _pattern(result: ValidationResult, field: str, value: Optional[str], allowed: tuple, message: str):
    if value is None:
        return
    if value not in allowed:
        result.add(field, "pattern", message)


def _past(result: ValidationResult, field: str, value: Optional[date], today: date, message: str):
    if value is None:
        return
    if isinstance(value, datetime):
        value = value.date()
    if not value < today:
        result.add(field, "past", message)


# =============================================================================
# ENTITY VALIDATORS
# =============================================================================

def validate_league(league: League) -> List[Violation]:
    result = ValidationResult("League")
    _not_blank(result, "name", league.name, "League name is required")
    _size(result, "name", league.name, 255)
    _not_blank(result, "country", league.country, "Country is required")
    _size(result, "country", league.country, 100)
    _not_null(result, "tier", league.tier, "Tier is required")
    _not_null(result, "has_advanced_stats", league.has_advanced_stats, "Advanced stats flag is required")
    _size(result, "fbref_id", league.fbref_id, 50)
    return result.violations


def validate_team(team: Team) -> List[Violation]:
    result = ValidationResult("Team")
    _not_blank(result, "name", team.name, "Team name is required")
    _size(result, "name", team.name, 255)
    _size(result, "country", team.country, 100)
    _size(result, "stadium", team.stadium, 255)
    return result.violations


def validate_season(season: Season) -> List[Violation]:
    result = ValidationResult("Season")
    _not_blank(result, "name", season.name, "Season name is required")
    _size(result, "name", season.name, 20)
    _not_null(result, "start_year", season.start_year, "Start year is required")
    _not_null(result, "end_year", season.end_year, "End year is required")
    return result.violations


def validate_position(position: Position) -> List[Violation]:
    result = ValidationResult("Position")
    _not_blank(result, "name", position.name, "Position name is required")
    _size(result, "name", position.name, 50)
    _not_blank(result, "position_group", position.position_group, "Position group is required")
    _pattern(
        result,
        "position_group",
        position.position_group,
        PositionGroup.values(),
        "Position group must be Goalkeeper, Defender, Midfielder, or Forward",
    )
    return result.violations


def validate_player(player: Player, today: Optional[date] = None) -> List[Violation]:
    """
    Validate a player.

    ``today`` is the reference date for the date-of-birth check and defaults
    to the current UTC date.
    """
    today = today or utc_today()
    result = ValidationResult("Player")

    _size(result, "transfermarkt_id", player.transfermarkt_id, 50)
    _size(result, "fbref_id", player.fbref_id, 50)

    _not_blank(result, "full_name", player.full_name, "Player name is required")
    _size(
        result,
        "full_name",
        player.full_name,
        max_length=255,
        min_length=2,
        message="Name must be between 2 and 255 characters",
    )

    _not_null(result, "date_of_birth", player.date_of_birth, "Date of birth is required")
    _past(result, "date_of_birth", player.date_of_birth, today, "Date of birth must be in the past")

    _size(result, "nationality", player.nationality, 100)
    _range(
        result,
        "height_cm",
        player.height_cm,
        minimum=150,
        maximum=220,
        min_message="Height must be at least 150cm",
        max_message="Height cannot exceed 220cm",
    )
    _pattern(result, "foot", player.foot, Foot.values(), "Foot must be 'left', 'right', or 'both'")
    _range(
        result,
        "current_market_value_eur",
        player.current_market_value_eur,
        minimum=0,
        min_message="Market value cannot be negative",
    )
    return result.violations


def validate_player_season_stats(stats: PlayerSeasonStats) -> List[Violation]:
    result = ValidationResult("PlayerSeasonStats")
    if stats.player is None and stats.player_id is None:
        result.add("player", "not_null", "Player is required")
    return result.violations


def validate_player_matchday_stats(stats: PlayerMatchdayStats) -> List[Violation]:
    result = ValidationResult("PlayerMatchdayStats")
    if stats.player is None and stats.player_id is None:
        result.add("player", "not_null", "Player is required")
    return result.violations


VALIDATORS: Dict[type, Callable[[Any], List[Violation]]] = {
    League: validate_league,
    Team: validate_team,
    Season: validate_season,
    Position: validate_position,
    Player: validate_player,
    PlayerSeasonStats: validate_player_season_stats,
    PlayerMatchdayStats: validate_player_matchday_stats,
}


def validate_entity(instance: Any) -> List[Violation]:
    """Run the validator registered for the instance's type."""
    validator = VALIDATORS.get(type(instance))
    if validator is None:
        raise TypeError(f"No validator registered for {type(instance).__name__}")
    return validator(instance)


def ensure_valid(instance: Any) -> None:
    """
    Validate and raise EntityValidationError on any violation.

    Raises:
        EntityValidationError: listing every offending field and rule
    """
    result = ValidationResult(type(instance).__name__)
    result.extend(validate_entity(instance))
    if not result.is_valid:
        logger.debug(
            f"Validation failed for {result.entity}",
            extra={"violations": [v.field + ":" + v.rule for v in result.violations]},
        )
    result.raise_for_violations()
