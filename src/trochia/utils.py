"""
Shared validation helpers.
"""

import warnings
from typing import Type

import numpy as np

from .config import config


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Report bad caller input according to config.STRICT_VALIDATION.

    In strict mode (the default) error_class(message) is raised. In lenient
    mode the message is emitted as a UserWarning pointing at the caller of
    the validating function, and execution continues; the caller decides
    how to back out.

    Parameters
    ----------
    message : str
        Description of the invalid input
    error_class : Type[Exception], optional
        Exception raised in strict mode. Default: ValueError

    Examples
    --------
    >>> from trochia.utils import validation_error
    >>> with temp_config(STRICT_VALIDATION=False):
    ...     validation_error("speed must be finite")  # warns only
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    warnings.warn(message, UserWarning, stacklevel=3)


def all_finite(*values) -> bool:
    """True if every value is a finite real number."""
    return bool(np.all(np.isfinite(np.asarray(values, dtype=float))))
