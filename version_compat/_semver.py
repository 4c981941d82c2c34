"""
Semantic version normalization and npm-style range matching.

Parsing and precedence of individual versions are handled by the `semver`
library. This module adds the range grammar on top of it:

- comparators (`<`, `<=`, `>`, `>=`, `=` or a bare version)
- X-ranges (`1.7.x`, `1.*`, `1`)
- hyphen ranges (`1.2.3 - 2.x`)
- tilde and caret ranges (`~1.2.3`, `^1.2.3`)
- unions of comparator sets joined by `||`

Ranges are canonicalized into explicit comparator sets. Exclusive upper
bounds always carry a `-0` pre-release floor, so that `<1.7.0` becomes
`<1.7.0-0` and the pre-releases of `1.7.0` fall outside of it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from semver import Version

_NUMERIC = r"0|[1-9]\d*"
_X_IDENTIFIER = rf"{_NUMERIC}|[xX*]"
_PRERELEASE_IDENTIFIER = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][a-zA-Z0-9-]*)"
_BUILD_IDENTIFIER = r"[0-9A-Za-z-]+"


def _partial(prefix: str = "") -> str:
    """
    A pattern for a possibly-partial version like `1`, `1.2.x` or `1.2.3-rc.1`.

    Group names are prefixed with `prefix`, so that two partial versions can
    appear in the same pattern.
    """
    return (
        rf"[v=]*(?P<{prefix}major>{_X_IDENTIFIER})"
        rf"(?:\.(?P<{prefix}minor>{_X_IDENTIFIER})"
        rf"(?:\.(?P<{prefix}patch>{_X_IDENTIFIER})"
        rf"(?:-(?P<{prefix}prerelease>{_PRERELEASE_IDENTIFIER}"
        rf"(?:\.{_PRERELEASE_IDENTIFIER})*))?"
        rf"(?:\+{_BUILD_IDENTIFIER}(?:\.{_BUILD_IDENTIFIER})*)?"
        r")?)?"
    )


_HYPHEN_RANGE = re.compile(rf"^{_partial('from_')} - {_partial('to_')}$")
_TILDE_RANGE = re.compile(rf"^~>?{_partial()}$")
_CARET_RANGE = re.compile(rf"^\^{_partial()}$")
_X_RANGE = re.compile(rf"^(?P<operator>[<>]?=?){_partial()}$")

# An operator separated from its version, e.g. `>= 1.2.3` or `~ 1.2`.
_DETACHED_OPERATOR = re.compile(r"(~>?|\^|[<>]=?|=)\s+")
_UNION = re.compile(r" ?\|\| ?")
_LEADING_PREFIX = re.compile(r"^[=v]+")


@dataclass(frozen=True)
class _Comparator:
    """
    A single bound within a comparator set, e.g. `>=1.7.0-0`.
    """

    operator: str
    """One of `""`, `"="`, `"<"`, `"<="`, `">"` or `">="`."""

    version: Version

    def test(self, version: Version) -> bool:
        """
        Returns whether `version` falls within this bound.
        """
        cmp = version.compare(self.version)
        if self.operator in ("", "="):
            return cmp == 0
        elif self.operator == "<":
            return cmp < 0
        elif self.operator == "<=":
            return cmp <= 0
        elif self.operator == ">":
            return cmp > 0
        else:
            return cmp >= 0

    def __str__(self) -> str:
        return f"{self.operator}{self.version}"


# A conjunction of bounds. The empty set matches every version.
_ComparatorSet = tuple[_Comparator, ...]


def _is_x(identifier: str | None) -> bool:
    return identifier is None or identifier in ("x", "X", "*")


def _bound(
    operator: str,
    major: int | str,
    minor: int | str,
    patch: int | str,
    prerelease: str | None = None,
) -> _Comparator:
    version = Version(int(major), int(minor), int(patch), prerelease)
    if operator == "<" and not version.prerelease:
        version = version.replace(prerelease="0")
    return _Comparator(operator, version)


def _x_range(match: re.Match[str]) -> list[_Comparator]:
    operator = match["operator"]
    major, minor, patch = match["major"], match["minor"], match["patch"]

    x_major = _is_x(major)
    x_minor = x_major or _is_x(minor)
    x_patch = x_minor or _is_x(patch)

    if not x_patch:
        return [_bound(operator, major, minor, patch, match["prerelease"])]

    if operator == "=":
        operator = ""

    if not operator:
        if x_major:
            return []
        elif x_minor:
            return [_bound(">=", major, 0, 0, "0"), _bound("<", int(major) + 1, 0, 0, "0")]
        return [
            _bound(">=", major, minor, 0, "0"),
            _bound("<", major, int(minor) + 1, 0, "0"),
        ]

    lower_major = 0 if x_major else int(major)
    lower_minor = 0 if x_minor else int(minor)

    if operator in (">", "<="):
        # >1.2.x starts at the next minor, and <=1.2.x stops right before it.
        if operator == ">" and x_major:
            return [_bound("<", 0, 0, 0, "0")]
        if operator == "<=" and x_major:
            return []
        if x_minor and not x_major:
            lower_major, lower_minor = lower_major + 1, 0
        elif not x_minor:
            lower_minor += 1
        operator = ">=" if operator == ">" else "<"

    return [_bound(operator, lower_major, lower_minor, 0, "0")]


def _tilde(match: re.Match[str]) -> list[_Comparator]:
    major, minor, patch = match["major"], match["minor"], match["patch"]

    if _is_x(major):
        return []
    elif _is_x(minor):
        return [_bound(">=", major, 0, 0, "0"), _bound("<", int(major) + 1, 0, 0, "0")]
    elif _is_x(patch):
        return [_bound(">=", major, minor, 0, "0"), _bound("<", major, int(minor) + 1, 0, "0")]

    return [
        _bound(">=", major, minor, patch, match["prerelease"] or "0"),
        _bound("<", major, int(minor) + 1, 0, "0"),
    ]


def _caret(match: re.Match[str]) -> list[_Comparator]:
    major, minor, patch = match["major"], match["minor"], match["patch"]
    prerelease = match["prerelease"]

    if _is_x(major):
        return []
    elif _is_x(minor):
        return [_bound(">=", major, 0, 0, "0"), _bound("<", int(major) + 1, 0, 0, "0")]
    elif _is_x(patch):
        if major == "0":
            upper = _bound("<", major, int(minor) + 1, 0, "0")
        else:
            upper = _bound("<", int(major) + 1, 0, 0, "0")
        return [_bound(">=", major, minor, 0, "0"), upper]

    if major == "0" and minor == "0":
        # ^0.0.3 only ever matches 0.0.3 itself.
        return [_bound("=", major, minor, patch, prerelease)]
    elif major == "0":
        upper = _bound("<", major, int(minor) + 1, 0, "0")
    else:
        upper = _bound("<", int(major) + 1, 0, 0, "0")
    return [_bound(">=", major, minor, patch, prerelease or "0"), upper]


def _hyphen(match: re.Match[str]) -> list[_Comparator]:
    comparators = []

    major, minor, patch = match["from_major"], match["from_minor"], match["from_patch"]
    if _is_x(major):
        pass
    elif _is_x(minor):
        comparators.append(_bound(">=", major, 0, 0, "0"))
    elif _is_x(patch):
        comparators.append(_bound(">=", major, minor, 0, "0"))
    else:
        comparators.append(_bound(">=", major, minor, patch, match["from_prerelease"]))

    major, minor, patch = match["to_major"], match["to_minor"], match["to_patch"]
    if _is_x(major):
        pass
    elif _is_x(minor):
        comparators.append(_bound("<", int(major) + 1, 0, 0, "0"))
    elif _is_x(patch):
        comparators.append(_bound("<", major, int(minor) + 1, 0, "0"))
    else:
        comparators.append(_bound("<=", major, minor, patch, match["to_prerelease"]))

    return comparators


def _expand(token: str) -> list[_Comparator]:
    for pattern, expand in ((_CARET_RANGE, _caret), (_TILDE_RANGE, _tilde), (_X_RANGE, _x_range)):
        match = pattern.match(token)
        if match is not None:
            return expand(match)
    raise ValueError(f"invalid comparator: {token!r}")


def _parse_comparator_set(text: str) -> _ComparatorSet:
    match = _HYPHEN_RANGE.match(text)
    if match is not None:
        return tuple(_hyphen(match))

    comparators: list[_Comparator] = []
    for token in _DETACHED_OPERATOR.sub(r"\1", text).split():
        comparators.extend(_expand(token))
    return tuple(comparators)


def _parse_range(range_: object) -> list[_ComparatorSet]:
    """
    Parse `range_` into its comparator sets.

    Raises a `ValueError` if `range_` is not a valid range.
    """
    if not isinstance(range_, str):
        raise ValueError(f"expected a range string, got {type(range_).__name__}")
    # Ranges are matched with single spaces only.
    text = " ".join(range_.split())
    return [_parse_comparator_set(text) for text in _UNION.split(text)]


def _format_range(sets: list[_ComparatorSet]) -> str:
    return "||".join(" ".join(str(c) for c in comparators) or "*" for comparators in sets)


def _parse(version: object) -> Version | None:
    """
    Parse `version` leniently: surrounding whitespace and a leading `v` or `=`
    are ignored, and build metadata is dropped.
    """
    if not isinstance(version, str):
        return None

    try:
        parsed = Version.parse(_LEADING_PREFIX.sub("", version.strip()))
    except ValueError:
        return None
    return parsed.replace(build=None)


def _parse_strict(version: str) -> Version:
    parsed = _parse(version)
    if parsed is None:
        raise ValueError(f"'{version}' is not a valid semantic version number")
    return parsed


def clean(version: object) -> str | None:
    """
    Normalize `version` into a bare `major.minor.patch[-prerelease]` string.

    Returns `None` if `version` is not a valid semantic version.
    """
    parsed = _parse(version)
    if parsed is None:
        return None
    return str(parsed)


def valid_range(range_: object) -> str | None:
    """
    Normalize `range_` into its canonical comparator-set form.

    For example, `1.7.x` becomes `>=1.7.0-0 <1.8.0-0` and `>1.5.2-R0.2 <1.6.5`
    becomes `>1.5.2-R0.2 <1.6.5-0`.

    Returns `None` if `range_` is not a valid range.
    """
    try:
        return _format_range(_parse_range(range_))
    except ValueError:
        return None


def satisfies(version: object, range_: object) -> bool:
    """
    Returns whether `version` falls within `range_`.

    An unparsable version or range never satisfies anything.
    """
    parsed = _parse(version)
    if parsed is None:
        return False

    try:
        sets = _parse_range(range_)
    except ValueError:
        return False

    return any(all(c.test(parsed) for c in comparators) for comparators in sets)


def compare(a: str, b: str) -> int:
    """
    Compare two versions by semantic version precedence, returning -1, 0 or 1.

    Raises a `ValueError` if either version is invalid.
    """
    return _parse_strict(a).compare(_parse_strict(b))


def rcompare(a: str, b: str) -> int:
    """
    The reverse of `compare`, for sorting in descending order.
    """
    return compare(b, a)
