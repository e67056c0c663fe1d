"""Re-bindable curve references."""

from typing import Optional

from xccylib.errors import UnboundTermStructureError

from .base import BaseCurve


class CurveHandle:
    """Shared reference to a curve that can be relinked later.

    Helpers hold handles rather than curves so the bootstrap driver can bind
    the curve under construction after the helpers have been built. An empty
    handle raises :class:`UnboundTermStructureError` when dereferenced.
    """

    def __init__(self, curve: Optional[BaseCurve] = None, name: str = ""):
        self.name = name
        self._curve = curve
        self._links = 0 if curve is None else 1

    @property
    def empty(self) -> bool:
        return self._curve is None

    @property
    def current_link(self) -> BaseCurve:
        if self._curve is None:
            raise UnboundTermStructureError(
                f"Curve handle {self.name or '<unnamed>'} is not linked to a curve"
            )
        return self._curve

    @property
    def version(self) -> tuple:
        """Changes whenever the handle is relinked or the linked curve moves."""
        curve_version = 0 if self._curve is None else self._curve.version
        return (self._links, curve_version)

    def link_to(self, curve: Optional[BaseCurve]) -> None:
        self._curve = curve
        self._links += 1

    def df(self, t) -> float:
        return self.current_link.df(t)

    def __repr__(self) -> str:
        target = "unbound" if self._curve is None else str(self._curve)
        return f"CurveHandle({self.name or '<unnamed>'} -> {target})"
