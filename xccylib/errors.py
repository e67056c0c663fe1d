"""Exception types raised across xccylib.

Configuration problems surface at construction time, an unbound curve handle
is a programming error, and numerical failures are reported to the bootstrap
driver, which owns the retry policy.
"""


class XccyError(Exception):
    """Base class for all xccylib errors."""


class ConfigurationError(XccyError, ValueError):
    """Raised when instrument, schedule or convention inputs are malformed."""


class MissingFixingError(ConfigurationError):
    """Raised when a past index fixing is required but was never stored."""


class UnboundTermStructureError(XccyError, RuntimeError):
    """Raised when a curve handle is dereferenced before being linked."""


class NumericalError(XccyError, ArithmeticError):
    """Raised when discount factors, fixings or annuities are not usable numbers."""


class BootstrapError(XccyError, RuntimeError):
    """Raised when the bootstrap driver cannot solve a curve node."""


class RootFindingError(BootstrapError):
    """Raised when bracketing or bisection fails to converge."""
