"""Exceptions raised by the isolkit analyses.

Every failure is fatal for the run that raised it; the pipeline logs which
stage failed and re-raises.
"""


class IsolkitError(Exception):
    """Base class for isolkit errors."""


class MalformedRecord(IsolkitError, ValueError):
    """A numeric record file has the wrong shape or non-numeric content."""

    def __init__(self, message="Record file could not be parsed."):
        super().__init__(message)


class IncompleteSelection(IsolkitError, RuntimeError):
    """The operator supplied fewer picks than requested."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Expected {expected} points but the operator supplied {received}."
        )


class DegenerateCycle(IsolkitError, ZeroDivisionError):
    """Selected vertices cannot define a stiffness (zero displacement span)."""

    def __init__(self, message="Envelope cycle has zero displacement at both extremes."):
        super().__init__(message)


class InconsistentWinding(IsolkitError, ValueError):
    """Picks were not taken clockwise around the loop."""

    def __init__(self, message="Envelope vertices are not ordered clockwise."):
        super().__init__(message)
