"""CLI helpers for date range resolution."""

from datetime import date, datetime

from moneysaver.cli.error_handling import fail
from moneysaver.utils.date_parser import PERIODS, day_bounds, get_date_range, parse_date


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates.

    At most one period flag may be set, and a period flag excludes
    --start-date and --end-date. Returns (None, None) when nothing is given
    and there is no default range.
    """
    chosen = [period for period, is_set in period_flags.items() if is_set]

    if len(chosen) > 1:
        options = ", ".join(f"--{period}" for period in PERIODS)
        fail(ctx, f"Only one period option ({options}) can be specified at a time.")

    if chosen and (start_date or end_date):
        fail(ctx, "Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.")

    if chosen:
        return get_date_range(chosen[0])

    start = end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            fail(ctx, f"Invalid start date: {e}")
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            fail(ctx, f"Invalid end date: {e}")

    if start is None and end is None and default_range is not None:
        return default_range
    return start, end


def to_timestamp_range(
    start: date | None, end: date | None
) -> tuple[datetime, datetime] | None:
    """Expand a date range to local-time timestamps covering whole days.

    Returns None when neither bound is set. An open bound extends to the
    start of 1970 or the end of year 9998.
    """
    if start is None and end is None:
        return None
    first, _ = day_bounds(start or date(1970, 1, 1))
    _, last = day_bounds(end or date(9998, 12, 31))
    return (first, last)
