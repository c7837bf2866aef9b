# gpwarp/errors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Exceptions raised by gpwarp.

The concrete classes also derive from the built-in exception that
plain numerical code would raise in the same situation, so that
``except ValueError`` keeps working for callers that do not know about
this module.
"""


class GPWarpError(Exception):
    """Base class for gpwarp errors."""


class DomainError(GPWarpError, ValueError):
    """A value lies outside the domain of a map or of a scale function.

    Raised when the inverse of a pushforward map is undefined at a
    training label, when a map fails to round-trip on the labels, or
    when a logarithmic grid is anchored at a non-positive value.
    """


class DegeneracyError(GPWarpError, ArithmeticError):
    """A Jacobian determinant is zero, negative or not finite."""


class DimensionMismatchError(GPWarpError, ValueError):
    """Declared block sizes do not agree with the data or the other operand."""


class SearchCancelledError(GPWarpError, RuntimeError):
    """A landscape sweep was cancelled or ran past its deadline.

    Attributes
    ----------
    landscape : list of (float, dict)
        Points evaluated before the sweep stopped, in exploration order.
    """

    def __init__(self, message, landscape=None):
        super().__init__(message)
        self.landscape = list(landscape) if landscape is not None else []


class SearchFailedError(GPWarpError, RuntimeError):
    """No configuration of a landscape has a finite net energy.

    Attributes
    ----------
    landscape : list of (float, dict)
        The evaluated points, all with a non-finite net energy.
    """

    def __init__(self, message, landscape=None):
        super().__init__(message)
        self.landscape = list(landscape) if landscape is not None else []
