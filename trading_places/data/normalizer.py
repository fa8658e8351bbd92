"""
Settlement normalization for converting raw dataset records to canonical form.

Resolves size codes and wealth values into 1-5 ratings and turns raw
settlement dictionaries into immutable ``Settlement`` records. Malformed
fields are replaced by documented defaults rather than rejected.
"""

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import structlog

from ..errors import InvalidSeasonError, MalformedRecordError
from .models import Season, Settlement, SettlementProperties

logger = structlog.get_logger(__name__)

# Settlement size codes: CS city-state, C city, T town, ST small town,
# V village, F fort, M metropolis.
SIZE_RATINGS: Mapping[str, int] = {
    "CS": 5,
    "C": 4,
    "T": 3,
    "ST": 2,
    "V": 1,
    "F": 1,
    "M": 5,
}

MIN_RATING = 1
MAX_RATING = 5


def _clamp_rating(value: int) -> int:
    return max(MIN_RATING, min(MAX_RATING, value))


def _numeric_rating(value: Any) -> Optional[int]:
    """Parse an int-like value, None if it is not numeric, not finite or zero."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) or None


def size_rating(size: Any) -> int:
    """
    Convert a settlement size code or number to a 1-5 rating.

    Codes are matched case-insensitively against ``SIZE_RATINGS``. Numeric
    values (including numeric strings) pass through, clamped to 1-5.
    Anything else resolves to 1.
    """
    if isinstance(size, str):
        code = size.strip().upper()
        if code in SIZE_RATINGS:
            return SIZE_RATINGS[code]

    numeric = _numeric_rating(size)
    if numeric is None:
        return MIN_RATING
    return _clamp_rating(numeric)


def wealth_rating(wealth: Any) -> int:
    """Convert a wealth value to a 1-5 rating, defaulting to 1."""
    numeric = _numeric_rating(wealth)
    if numeric is None:
        return MIN_RATING
    return _clamp_rating(numeric)


def _population(value: Any) -> int:
    numeric = _numeric_rating(value)
    if numeric is None or numeric < 0:
        return 0
    return numeric


def resolve_properties(settlement: Optional[Settlement]) -> SettlementProperties:
    """
    Resolve a settlement into canonical numeric ratings.

    Never raises: a missing settlement resolves to the smallest, poorest,
    unflagged settlement.

    Args:
        settlement: Settlement record (may be None)

    Returns:
        SettlementProperties with ratings in [1, 5] and lower-cased flags
    """
    if settlement is None:
        return SettlementProperties(
            size_numeric=MIN_RATING,
            wealth_numeric=MIN_RATING,
            population=0,
            production_categories=(),
        )

    return SettlementProperties(
        size_numeric=size_rating(settlement.size),
        wealth_numeric=wealth_rating(settlement.wealth),
        population=_population(settlement.population),
        production_categories=tuple(
            str(flag).lower() for flag in (settlement.flags or ())
        ),
    )


@dataclass
class SettlementNormalizationResult:
    """Result of settlement normalization process."""
    # Normalized record (None if invalid)
    settlement: Optional[Settlement] = None
    # Processing metadata
    success: bool = True
    error_msg: Optional[str] = None
    failure: Optional[MalformedRecordError] = None

    @classmethod
    def success(cls, settlement: Settlement):
        """Create successful result with normalized settlement."""
        return cls(
            settlement=settlement,
            success=True
        )

    @classmethod
    def error(cls, failure: MalformedRecordError):
        """Create error result from the record failure."""
        return cls(
            success=False,
            error_msg=str(failure),
            failure=failure
        )


def _string_tuple(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value if item is not None and item != "")
    return ()


def _rating_field(value: Any) -> Any:
    return value if isinstance(value, (str, int)) and not isinstance(value, bool) else None


class SettlementNormalizer:
    """
    Settlement record normalization.

    Converts raw dataset dictionaries into ``Settlement`` records. Only a
    missing name is fatal; every other field falls back to a default.
    """

    def __init__(self) -> None:
        self.logger = logger

    def normalize(self, raw: Any) -> SettlementNormalizationResult:
        """
        Normalize a raw settlement dictionary.

        Args:
            raw: Settlement entry from the dataset ``settlements`` list

        Returns:
            SettlementNormalizationResult with the record or error information
        """
        try:
            return SettlementNormalizationResult.success(self._build(raw))
        except MalformedRecordError as e:
            return SettlementNormalizationResult.error(e)

    def _build(self, raw: Any) -> Settlement:
        if not isinstance(raw, Mapping):
            raise MalformedRecordError(
                f"Settlement record must be an object, got {type(raw).__name__}",
                record_type="settlement",
            )

        name = raw.get("name")
        if not isinstance(name, str) or not name.strip():
            raise MalformedRecordError(
                "Missing required field: name",
                record_type="settlement",
                field="name",
                context={"region": raw.get("region")},
            )

        return Settlement(
            name=name.strip(),
            region=str(raw.get("region") or ""),
            size=_rating_field(raw.get("size")),
            wealth=_rating_field(raw.get("wealth")),
            population=_population(raw.get("population")),
            flags=_string_tuple(raw.get("flags")),
            ruler=str(raw.get("ruler") or ""),
            notes=str(raw.get("notes") or ""),
            produces=_string_tuple(raw.get("produces")),
            demands=_string_tuple(raw.get("demands")),
        )

    def normalize_all(self, records: Any) -> list[Settlement]:
        """Normalize a list of records, skipping and logging invalid entries."""
        if not isinstance(records, (list, tuple)):
            if records is not None:
                self.logger.warning(
                    "Settlements must be a list, ignoring",
                    got=type(records).__name__,
                )
            return []

        settlements: list[Settlement] = []
        for index, raw in enumerate(records):
            result = self.normalize(raw)
            if not result.success:
                self.logger.warning(
                    "Skipping invalid settlement record",
                    index=index,
                    error=result.error_msg,
                    field=result.failure.field if result.failure else None,
                )
                continue
            settlements.append(result.settlement)
        return settlements


def parse_season(value: Any) -> Season:
    """
    Parse a season token (case-insensitive) into a ``Season``.

    Raises:
        InvalidSeasonError: If the token is not one of the four seasons
    """
    if isinstance(value, Season):
        return value
    token = value.strip().lower() if isinstance(value, str) else value
    try:
        return Season(token)
    except ValueError:
        valid = ", ".join(season.value for season in Season)
        raise InvalidSeasonError(
            f"Invalid season: {value!r}. Expected one of: {valid}",
            season=str(value),
        ) from None
