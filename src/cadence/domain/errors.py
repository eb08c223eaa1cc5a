"""Exceptions raised at the validation boundary.

Engine operations never raise on in-domain input; these are for callers that
reject malformed records before handing them to the engine.
"""


class CadenceError(Exception):
    """Base class for all cadence errors."""


class InvalidReviewError(CadenceError, ValueError):
    """Raised when a card, review or session record is outside the documented domain."""
