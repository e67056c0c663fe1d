"""Configuration for the piecewise curve bootstrap."""

from dataclasses import dataclass


@dataclass
class BootstrapConfig:
    """Configuration for bootstrap process.

    Attributes:
        interpolation_method: Discount factor interpolation of the solved curve
        day_count_convention: Time axis of the solved curve
        accuracy: Largest node change between passes accepted as converged
        quote_tolerance: Residual (market minus implied quote) accepted per node
        node_tolerance: Bisection stops once the bracket is narrower than this
        max_iterations: Bisection iterations per node
        max_passes: Full passes over all helpers
        bracket_width: Relative half-width of the initial bracket around the guess
        bracket_attempts: Bracket expansions before giving up on a node
        numerical_retries: Retries with a narrower bracket after a numerical failure
        initial_rate: Zero rate used to guess the first node
    """

    interpolation_method: str = "STEP_FORWARD_CONTINUOUS"
    day_count_convention: str = "ACT/365F"
    accuracy: float = 1e-12
    quote_tolerance: float = 1e-14
    node_tolerance: float = 1e-15
    max_iterations: int = 200
    max_passes: int = 5
    bracket_width: float = 0.05
    bracket_attempts: int = 20
    numerical_retries: int = 8
    initial_rate: float = 0.02
