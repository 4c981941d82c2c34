"""
The `version_compat` APIs.
"""

from version_compat._errors import (
    CompatibilityMatrixError,
    InvalidMatrixTypeError,
    InvalidRangeError,
    InvalidVersionError,
    MatrixFileError,
    MissingParameterError,
)
from version_compat._loader import load_matrix
from version_compat._matrix import CompatibilityMatrix
from version_compat._semver import clean, compare, rcompare, satisfies, valid_range
from version_compat._version import __version__

__all__ = [
    "CompatibilityMatrix",
    "CompatibilityMatrixError",
    "InvalidMatrixTypeError",
    "InvalidRangeError",
    "InvalidVersionError",
    "MatrixFileError",
    "MissingParameterError",
    "__version__",
    "clean",
    "compare",
    "load_matrix",
    "rcompare",
    "satisfies",
    "valid_range",
]
