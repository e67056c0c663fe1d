"""Rate helper contract used by the bootstrap driver."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from xccylib.curves.base import BaseCurve
from xccylib.curves.handles import CurveHandle
from xccylib.errors import ConfigurationError
from xccylib.quotes import Quote, as_quote
from xccylib.settings import get_evaluation_date

from .visitors import HelperKind, HelperVisitor, T


class RateHelper(ABC):
    """Market instrument the bootstrapper fits a curve node to.

    The curve being bootstrapped is held through a :class:`CurveHandle`
    bound by :meth:`set_term_structure`; the driver rebinds it after every
    node update.

    Attributes:
        earliest_date: First date the instrument depends on
        latest_date: Last date the instrument depends on
        maturity_date: Instrument maturity
        pillar_date: Curve node the helper determines
    """

    def __init__(self, quote):
        if quote is None:
            raise ConfigurationError("Rate helper requires a market quote")
        self._quote: Quote = as_quote(quote)
        self._term_structure = CurveHandle(name="curve under construction")
        self.earliest_date: Optional[date] = None
        self.latest_date: Optional[date] = None
        self.maturity_date: Optional[date] = None
        self.pillar_date: Optional[date] = None

    @property
    def quote(self) -> Quote:
        return self._quote

    @property
    def term_structure(self) -> CurveHandle:
        return self._term_structure

    @property
    @abstractmethod
    def kind(self) -> HelperKind:
        """Variant tag used for visitor dispatch."""

    def set_term_structure(self, curve: BaseCurve) -> None:
        """Bind (or rebind) the curve under construction."""
        self._term_structure.link_to(curve)
        self.mark_stale()

    def mark_stale(self) -> None:
        """Drop cached results; they are recomputed on the next read."""

    def _require_term_structure(self) -> BaseCurve:
        """The bound curve; raises UnboundTermStructureError if none is bound."""
        return self._term_structure.current_link

    @abstractmethod
    def implied_quote(self) -> float:
        """Quote implied by the current state of the curves."""

    def quote_error(self) -> float:
        return self._quote.value - self.implied_quote()

    def accept(self, visitor: HelperVisitor[T]) -> T:
        return visitor(self.kind, self)


class RelativeDateRateHelper(RateHelper):
    """Rate helper whose dates are relative to the evaluation date."""

    def __init__(self, quote):
        super().__init__(quote)
        self._evaluation_date = get_evaluation_date()

    @property
    def evaluation_date(self) -> date:
        return self._evaluation_date

    @abstractmethod
    def initialize_dates(self) -> None:
        """Regenerate schedules and key dates from the evaluation date."""

    def update(self) -> None:
        """Regenerate dates if the evaluation date moved since the last call."""
        today = get_evaluation_date()
        if today != self._evaluation_date:
            self._evaluation_date = today
            self.initialize_dates()
        self.mark_stale()
