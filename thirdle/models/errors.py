"""
Error Types

Exceptions raised for programming and invariant violations. Player mistakes
(short guesses, unknown words) are reported as outcomes, not exceptions.
"""


class ThirdleError(Exception):
    """Base class for engine and topology failures."""


class TopologyError(ThirdleError, ValueError):
    """A coordinate or index fell outside the tower layout."""


class AnimationInFlightError(ThirdleError):
    """A guess was submitted before the previous render queue finished playing."""


class AnimationStateError(ThirdleError):
    """A completion signal arrived with no render queue in flight, or twice."""
