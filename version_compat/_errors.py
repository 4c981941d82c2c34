"""
Exceptions raised while building a `CompatibilityMatrix`.
"""


class CompatibilityMatrixError(Exception):
    """
    The base exception for every failure to build or load a compatibility matrix.

    Catch this to handle any bad matrix, whether it came from code or from a file.
    """

    pass


class MissingParameterError(CompatibilityMatrixError):
    """
    Raised when no compatibility matrix is supplied.
    """

    pass


class InvalidMatrixTypeError(CompatibilityMatrixError):
    """
    Raised when the supplied compatibility matrix is not a mapping.
    """

    pass


class InvalidVersionError(CompatibilityMatrixError):
    """
    Raised when a primary version in the matrix is not a valid semantic version.
    """

    def __init__(self, raw: object) -> None:
        """
        Create a new `InvalidVersionError` for the offending `raw` key.
        """
        super().__init__(f"'{raw}' is not a valid semantic version number")
        self.raw = raw


class InvalidRangeError(CompatibilityMatrixError):
    """
    Raised when a compatibility range in the matrix is not a valid semantic version range.
    """

    def __init__(self, raw: object) -> None:
        """
        Create a new `InvalidRangeError` for the offending `raw` value.
        """
        super().__init__(f"'{raw}' is not a valid semantic version range")
        self.raw = raw


class MatrixFileError(CompatibilityMatrixError):
    """
    Raised when a compatibility matrix cannot be read from a file.
    """

    pass
