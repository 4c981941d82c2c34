"""
Map primary versions to the secondary version ranges they're compatible with.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from functools import cmp_to_key
from types import MappingProxyType
from typing import Any

import icontract

from version_compat import _semver
from version_compat._errors import (
    InvalidMatrixTypeError,
    InvalidRangeError,
    InvalidVersionError,
    MissingParameterError,
)
from version_compat._loader import load_matrix

logger = logging.getLogger(__name__)


def _is_descending(versions: list[str]) -> bool:
    return all(_semver.compare(a, b) > 0 for a, b in zip(versions, versions[1:]))


def _sanitize(matrix: Any) -> dict[str, str]:
    """
    Build a normalized copy of `matrix`, leaving `matrix` itself untouched.
    """
    # An empty mapping is a valid (empty) matrix, unlike other falsy values.
    if matrix is None or (not isinstance(matrix, Mapping) and not matrix):
        raise MissingParameterError("compatibility matrix is a required parameter")
    if not isinstance(matrix, Mapping):
        raise InvalidMatrixTypeError(
            f"compatibility matrix must be a mapping, not {type(matrix).__name__}"
        )

    sanitized: dict[str, str] = {}
    for raw_version, raw_range in matrix.items():
        version = _semver.clean(raw_version)
        if version is None:
            raise InvalidVersionError(raw_version)

        range_ = _semver.valid_range(raw_range)
        if range_ is None:
            raise InvalidRangeError(raw_range)

        sanitized[version] = range_

    return sanitized


class CompatibilityMatrix:
    """
    Correlates "primary" versions with the range of "secondary" versions each
    of them is compatible with.

    Keys and ranges are normalized on the way in: a leading `v` is stripped
    from versions and ranges are expanded into explicit comparator sets.

    The expected usage is:
    ```
    versions = CompatibilityMatrix({
        "1.0.0": "2.4.x",
        "1.1.3": "2.4.7 - 2.4.x",
        "1.2.0": "2.5.x",
    })
    versions.compatibility_matrix["1.1.3"]  # ">=2.4.7 <2.5.0-0"
    versions.compatible_with("2.4.8")  # ["1.1.3", "1.0.0"]
    versions.recommended_for("2.4.8")  # "1.1.3"
    versions.recommended_for("3.0.0")  # None
    ```
    """

    def __init__(self, matrix: Mapping[str, str] | None = None) -> None:
        """
        Create a new `CompatibilityMatrix`.

        `matrix` maps primary versions to compatible secondary version ranges.

        Raises a `CompatibilityMatrixError` subclass if `matrix` is missing, is
        not a mapping, or contains an invalid version or range.
        """
        self._matrix: dict[str, str] = {}
        self.set_compatibility_matrix(matrix)

    @classmethod
    def from_file(
        cls, path: str | os.PathLike[str], *, table: str | None = None
    ) -> CompatibilityMatrix:
        """
        Create a new `CompatibilityMatrix` from a JSON or TOML file.

        See `load_matrix` for the meaning of `table`.
        """
        return cls(load_matrix(path, table=table))

    @property
    def compatibility_matrix(self) -> Mapping[str, str]:
        """
        A read-only view of the normalized matrix.
        """
        return MappingProxyType(self._matrix)

    def set_compatibility_matrix(self, matrix: Mapping[str, str] | None) -> None:
        """
        Replace the whole matrix with `matrix`.

        `matrix` is validated in full before anything is replaced, so the current
        matrix survives any failure.
        """
        self._matrix = _sanitize(matrix)
        logger.debug(f"compatibility matrix replaced with {len(self._matrix)} entries")

    def all(self) -> list[str]:
        """
        Returns every primary version, in the order the matrix listed them.
        """
        return list(self._matrix)

    @icontract.ensure(lambda result: _is_descending(result))
    def compatible_with(self, version: str) -> list[str]:
        """
        Returns the primary versions compatible with the secondary `version`,
        highest first.

        An invalid `version` is compatible with nothing.
        """
        matrix = self._matrix
        compatible = [
            primary for primary, range_ in matrix.items() if _semver.satisfies(version, range_)
        ]
        return sorted(compatible, key=cmp_to_key(_semver.rcompare))

    def recommended_for(self, version: str) -> str | None:
        """
        Returns the highest primary version compatible with the secondary
        `version`, or `None` if there isn't one.
        """
        compatible = self.compatible_with(version)
        if not compatible:
            return None
        return compatible[0]

    def range_for(self, version: str) -> str | None:
        """
        Returns the normalized range for the primary `version`, if it's in the matrix.
        """
        cleaned = _semver.clean(version)
        if cleaned is None:
            return None
        return self._matrix.get(cleaned)

    def __contains__(self, version: object) -> bool:
        cleaned = _semver.clean(version)
        return cleaned is not None and cleaned in self._matrix

    def __iter__(self) -> Iterator[str]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._matrix)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._matrix!r})"
