"""Market quote observables.

Quotes are owned by whoever feeds market data. Helpers only read them, and
compare ``version`` against the version they last priced with to decide
whether a cached result is stale.
"""

import math
from typing import Optional, Protocol

from xccylib.errors import ConfigurationError


class Quote(Protocol):
    """Read-only view of a market observable."""

    @property
    def value(self) -> float:
        ...

    @property
    def version(self) -> int:
        ...

    def is_valid(self) -> bool:
        ...


class SimpleQuote:
    """Mutable market quote with a change counter."""

    def __init__(self, value: Optional[float] = None, name: str = ""):
        self.name = name
        self._value: Optional[float] = None
        self._version = 0
        if value is not None:
            self.set_value(value)

    @property
    def value(self) -> float:
        if self._value is None:
            raise ConfigurationError(f"Quote {self.name or '<unnamed>'} has no value")
        return self._value

    @property
    def version(self) -> int:
        return self._version

    def set_value(self, value: float) -> float:
        """Store a new value and return the difference to the previous one."""
        value = float(value)
        if math.isnan(value):
            raise ConfigurationError("Quote value must not be NaN")
        previous = self._value if self._value is not None else 0.0
        if value != self._value:
            self._value = value
            self._version += 1
        return value - previous

    def reset(self) -> None:
        self._value = None
        self._version += 1

    def is_valid(self) -> bool:
        return self._value is not None

    def __repr__(self) -> str:
        return f"SimpleQuote(value={self._value!r}, name={self.name!r})"


def as_quote(value) -> Quote:
    """Wrap plain numbers into a :class:`SimpleQuote`; pass quotes through."""
    if value is None:
        raise ConfigurationError("A quote or numeric value is required")
    if isinstance(value, (int, float)):
        return SimpleQuote(float(value))
    if not hasattr(value, "value") or not hasattr(value, "version"):
        raise ConfigurationError(f"Unsupported quote object: {value!r}")
    return value
