from __future__ import annotations


class ValidationError(ValueError):
    """Raised when validation constraints are violated."""


class InvalidSegmentError(ValidationError):
    """Raised when a segment has no usable tangent direction."""


class ToleranceWarning(RuntimeWarning):
    """Emitted when an offset could not be brought within tolerance."""
