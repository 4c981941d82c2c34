"""
Load raw compatibility matrices from JSON and TOML files.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import toml

from version_compat._errors import MatrixFileError

logger = logging.getLogger(__name__)


def load_matrix(path: str | os.PathLike[str], *, table: str | None = None) -> Any:
    """
    Read a raw compatibility matrix from `path`.

    `.json` and `.toml` files are supported. `table` optionally names a nested
    table using dotted keys, e.g. `tool.version-compat.matrix` within a
    `pyproject.toml`; without it the whole document is the matrix.

    The result is not validated here: pass it to a `CompatibilityMatrix`.

    Raises a `MatrixFileError` if the file can't be read or decoded, or if
    `table` doesn't exist.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in (".json", ".toml"):
        raise MatrixFileError(f"unsupported matrix file type: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            if suffix == ".json":
                data = json.load(f)
            else:
                data = toml.load(f)
    except OSError as e:
        raise MatrixFileError(f"failed to read matrix file {path}: {e}") from e
    except (json.JSONDecodeError, toml.TomlDecodeError) as e:
        raise MatrixFileError(f"failed to parse matrix file {path}: {e}") from e

    if table is not None:
        for key in table.split("."):
            if not isinstance(data, dict) or key not in data:
                raise MatrixFileError(f"matrix file {path} has no `{table}` table")
            data = data[key]

    logger.debug(f"loaded compatibility matrix from {path}")
    return data
