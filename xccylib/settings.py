"""Global evaluation date shared by helpers, indices and the bootstrap driver."""

from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, Optional, Union

_EVALUATION_DATE: Optional[date] = None


def get_evaluation_date() -> date:
    """Return the evaluation date (today's date unless one was set)."""
    if _EVALUATION_DATE is None:
        return date.today()
    return _EVALUATION_DATE


def set_evaluation_date(value: Optional[Union[date, datetime]]) -> None:
    """Set the evaluation date; ``None`` restores the default of today."""
    global _EVALUATION_DATE
    if isinstance(value, datetime):
        value = value.date()
    _EVALUATION_DATE = value


@contextmanager
def evaluation_date(value: Union[date, datetime]) -> Iterator[date]:
    """Temporarily pin the evaluation date.

    Example:
        >>> with evaluation_date(date(2024, 3, 15)):
        ...     helper.update()
    """
    previous = _EVALUATION_DATE
    set_evaluation_date(value)
    try:
        yield get_evaluation_date()
    finally:
        set_evaluation_date(previous)
