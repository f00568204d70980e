"""Exceptions raised by the alignment core."""

from __future__ import annotations


class AlignmentError(Exception):
    """Base class for all errors raised while aligning a progress photo."""


class InvalidImage(AlignmentError):
    """Raised when the source image has unusable dimensions or cannot be decoded."""

    user_message = "Failed to process image, please try another."


class DegenerateTransform(AlignmentError):
    """Raised when a size handed to the composer is zero, negative or not finite."""


class InvalidInput(AlignmentError):
    """Raised when the caller breaks the solver or planner input contract."""
