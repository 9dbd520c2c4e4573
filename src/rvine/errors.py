"""
Exceptions raised while evaluating an R-vine CDF.

Every validation error is raised before the first sample is drawn; the
caller is expected to fix the input and repeat the whole call.
"""


class RVineError(Exception):
    """Base class for all errors raised by the package."""


class ShapeError(RVineError, ValueError):
    """Query data does not match the dimension of the model."""


class MissingValueError(RVineError, ValueError):
    """Query data contains missing values that cannot be resolved."""


class DomainError(RVineError, ValueError):
    """Query value outside the closed unit interval."""


class ConsistencyError(RVineError, ValueError):
    """Vine structure, family or parameter matrices are inconsistent."""


class PreparationError(RVineError, ValueError):
    """Model could not be compiled into the form the sampler expects."""


class SamplerError(RVineError, RuntimeError):
    """Joint samples could not be drawn from the model."""


class MissingValueWarning(UserWarning):
    """Query rows with missing values were removed before evaluation."""
