"""
Request Validation

Checks raw request parameters before the engine runs. Produces a list of
human-readable errors rather than raising, so callers can report all
problems at once.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from training_consistency.config.schema import ConsistencyConfig
from training_consistency.core.models import ValidationResult
from training_consistency.core.window import to_utc


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string, epoch milliseconds or datetime into aware UTC.

    A trailing "Z" is accepted. Date-only strings are taken as UTC midnight.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp.
    """
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"Timestamp out of range: {value!r}") from e
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return to_utc(datetime.fromisoformat(text))
    raise ValueError(f"Not a timestamp: {value!r}")


def _years_before(instant: datetime, years: int) -> datetime:
    try:
        return instant.replace(year=instant.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return instant.replace(year=instant.year - years, day=28)


def validate(
    user_id: Optional[str],
    reference_date: Optional[str],
    now: Optional[datetime] = None,
    config: Optional[ConsistencyConfig] = None,
) -> ValidationResult:
    """Validate request parameters.

    Args:
        user_id: Raw user identifier; required and non-blank.
        reference_date: Optional ISO-8601 reference date.
        now: Clock override for the future/past limits.
        config: Limits for how far the reference date may drift from now.

    Returns:
        ValidationResult with the stripped user id and parsed reference date.
    """
    config = config or ConsistencyConfig()
    now = to_utc(now) if now else datetime.now(timezone.utc)
    errors = []

    if user_id is None or user_id == "":
        errors.append("userId is required")
    elif not isinstance(user_id, str) or not user_id.strip():
        errors.append("userId must be a non-empty string")

    parsed = None
    if reference_date:
        try:
            parsed = parse_timestamp(reference_date)
        except ValueError:
            errors.append("referenceDate must be a valid ISO 8601 date string")
        else:
            if parsed > now + timedelta(days=config.max_future_days):
                errors.append(
                    f"referenceDate cannot be more than {config.max_future_days} days in the future"
                )
            if parsed < _years_before(now, config.max_past_years):
                unit = "year" if config.max_past_years == 1 else "years"
                errors.append(
                    f"referenceDate cannot be more than {config.max_past_years} {unit} in the past"
                )

    return ValidationResult(
        valid=not errors,
        errors=errors,
        user_id=user_id.strip() if isinstance(user_id, str) else None,
        reference_date=parsed,
    )
