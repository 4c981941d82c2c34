"""Tests for the compatibility matrix."""

import logging

import pretend
import pytest

import version_compat._matrix as _matrix
from version_compat import (
    CompatibilityMatrix,
    CompatibilityMatrixError,
    InvalidMatrixTypeError,
    InvalidRangeError,
    InvalidVersionError,
    MissingParameterError,
)


class TestConstruction:
    def test_normalizes_matrix(self, versions):
        assert dict(versions.compatibility_matrix) == {
            "1.0.1": "1.5.2-R0.1",
            "1.0.2-beta": ">1.5.2-R0.2 <1.6.5-0",
            "1.0.3": ">=1.6.0-0 <1.7.0-0",
            "1.0.4": ">=1.7.0-0 <1.8.0-0",
        }

    def test_does_not_modify_input(self, raw_matrix):
        original = dict(raw_matrix)
        CompatibilityMatrix(raw_matrix)
        assert raw_matrix == original

    def test_does_not_alias_input(self, raw_matrix, versions):
        raw_matrix["v9.9.9"] = "*"
        assert "9.9.9" not in versions
        assert len(versions) == 4

    def test_empty_matrix(self):
        versions = CompatibilityMatrix({})
        assert versions.all() == []
        assert versions.compatible_with("1.0.0") == []
        assert versions.recommended_for("1.0.0") is None

    def test_duplicate_normalized_keys(self):
        versions = CompatibilityMatrix({"v1.0.0": "1.x", "1.0.0": "2.x"})
        assert dict(versions.compatibility_matrix) == {"1.0.0": ">=2.0.0-0 <3.0.0-0"}

    def test_missing(self):
        with pytest.raises(MissingParameterError, match="is a required parameter"):
            CompatibilityMatrix()

    @pytest.mark.parametrize("matrix", [None, 0, "", False])
    def test_missing_falsy(self, matrix):
        with pytest.raises(MissingParameterError):
            CompatibilityMatrix(matrix)

    @pytest.mark.parametrize(
        "matrix",
        [
            1,
            3.5,
            "1.0.0",
            ["1.0.0", "1.x"],
            [("1.0.0", "1.x")],
            lambda: {"1.0.0": "1.x"},
            pretend.stub(items=lambda: []),
        ],
    )
    def test_not_a_mapping(self, matrix):
        with pytest.raises(InvalidMatrixTypeError, match="must be a mapping"):
            CompatibilityMatrix(matrix)

    def test_invalid_version(self, raw_matrix):
        raw_matrix["5.02"] = "1.5.2-R0.1"
        with pytest.raises(
            InvalidVersionError, match="'5.02' is not a valid semantic version number"
        ) as exc:
            CompatibilityMatrix(raw_matrix)
        assert exc.value.raw == "5.02"

    def test_invalid_range(self, raw_matrix):
        raw_matrix["1.5.2"] = ">5.02"
        with pytest.raises(
            InvalidRangeError, match="'>5.02' is not a valid semantic version range"
        ) as exc:
            CompatibilityMatrix(raw_matrix)
        assert exc.value.raw == ">5.02"

    def test_non_string_range(self):
        with pytest.raises(InvalidRangeError, match="'3' is not a valid semantic version range"):
            CompatibilityMatrix({"1.0.0": 3})

    def test_errors_share_a_base(self):
        for error in (
            MissingParameterError,
            InvalidMatrixTypeError,
            InvalidVersionError,
            InvalidRangeError,
        ):
            assert issubclass(error, CompatibilityMatrixError)


class TestSetCompatibilityMatrix:
    def test_replaces_matrix(self, versions):
        versions.set_compatibility_matrix(
            {
                "v1.0.5": "1.5.2-R0.1",
                "v1.0.6-beta": ">1.5.2-R0.2 <1.6.x",
                "v1.0.7": ">=1.6.0-0 <1.7.0-0",
                "v1.0.8": ">1.6.2",
            }
        )
        assert dict(versions.compatibility_matrix) == {
            "1.0.5": "1.5.2-R0.1",
            "1.0.6-beta": ">1.5.2-R0.2 <1.6.0-0",
            "1.0.7": ">=1.6.0-0 <1.7.0-0",
            "1.0.8": ">1.6.2",
        }
        assert versions.all() == ["1.0.5", "1.0.6-beta", "1.0.7", "1.0.8"]

    def test_missing(self, versions):
        with pytest.raises(MissingParameterError, match="is a required parameter"):
            versions.set_compatibility_matrix(None)

    @pytest.mark.parametrize(
        "matrix",
        [
            [],
            42,
            {"1.0.0": "1.x", "nope": "2.x"},
            {"1.0.0": "1.x", "2.0.0": "nope"},
        ],
    )
    def test_failure_keeps_previous_matrix(self, versions, matrix):
        before = dict(versions.compatibility_matrix)

        with pytest.raises(CompatibilityMatrixError):
            versions.set_compatibility_matrix(matrix)

        assert dict(versions.compatibility_matrix) == before
        assert versions.compatible_with("1.6.4") == ["1.0.3", "1.0.2-beta"]

    def test_logs_replacement(self, versions, caplog):
        with caplog.at_level(logging.DEBUG, logger="version_compat._matrix"):
            versions.set_compatibility_matrix({"2.0.0": "3.x"})
        assert "1 entries" in caplog.text


class TestCompatibilityMatrixView:
    def test_is_read_only(self, versions):
        view = versions.compatibility_matrix
        with pytest.raises(TypeError):
            view["1.0.9"] = "*"  # type: ignore[index]
        assert "1.0.9" not in versions

    def test_cannot_be_reassigned(self, versions):
        with pytest.raises(AttributeError):
            versions.compatibility_matrix = {}  # type: ignore[misc]
        assert len(versions) == 4

    def test_view_is_a_snapshot(self, versions):
        view = versions.compatibility_matrix
        versions.set_compatibility_matrix({"2.0.0": "3.x"})
        assert list(view) == ["1.0.1", "1.0.2-beta", "1.0.3", "1.0.4"]
        assert list(versions.compatibility_matrix) == ["2.0.0"]


class TestQueries:
    def test_all(self, versions):
        assert versions.all() == ["1.0.1", "1.0.2-beta", "1.0.3", "1.0.4"]

    def test_all_is_a_copy(self, versions):
        versions.all().append("9.9.9")
        assert versions.all() == ["1.0.1", "1.0.2-beta", "1.0.3", "1.0.4"]

    @pytest.mark.parametrize(
        ("version", "compatible"),
        [
            ("1.5.2-R0.1", ["1.0.1"]),
            ("1.5.3", ["1.0.2-beta"]),
            ("1.5.1", []),
            ("1.6.4", ["1.0.3", "1.0.2-beta"]),
            ("1.6.5", ["1.0.3"]),
            ("1.7.0-rc.1", ["1.0.4"]),
            ("v1.7.2", ["1.0.4"]),
            ("1.8.0", []),
        ],
    )
    def test_compatible_with(self, versions, version, compatible):
        assert versions.compatible_with(version) == compatible

    @pytest.mark.parametrize("version", ["1.6", "garbage", "", None])
    def test_compatible_with_invalid_version(self, versions, version):
        assert versions.compatible_with(version) == []
        assert versions.recommended_for(version) is None

    def test_compatible_with_orders_prereleases(self):
        versions = CompatibilityMatrix(
            {"2.0.0-beta": "1.x", "2.0.0": "1.x", "2.0.0-alpha": "1.x", "10.0.0": "1.x"}
        )
        assert versions.compatible_with("1.2.3") == [
            "10.0.0",
            "2.0.0",
            "2.0.0-beta",
            "2.0.0-alpha",
        ]

    @pytest.mark.parametrize(
        ("version", "recommended"),
        [
            ("1.5.3", "1.0.2-beta"),
            ("1.6.4", "1.0.3"),
            ("1.6.5", "1.0.3"),
            ("1.5.1", None),
            ("1.8.0", None),
        ],
    )
    def test_recommended_for(self, versions, version, recommended):
        assert versions.recommended_for(version) == recommended

    def test_range_for(self, versions):
        assert versions.range_for("v1.0.4") == ">=1.7.0-0 <1.8.0-0"
        assert versions.range_for("1.0.9") is None
        assert versions.range_for("nope") is None

    def test_container_protocol(self, versions):
        assert "v1.0.3" in versions
        assert "1.0.3" in versions
        assert "1.0.9" not in versions
        assert "garbage" not in versions
        assert 103 not in versions
        assert list(versions) == versions.all()
        assert len(versions) == 4

    def test_repr(self):
        versions = CompatibilityMatrix({"v1.0.0": "1.x"})
        assert repr(versions) == "CompatibilityMatrix({'1.0.0': '>=1.0.0-0 <2.0.0-0'})"


def test_from_file(monkeypatch):
    load_matrix = pretend.call_recorder(lambda path, table=None: {"v1.0.0": "2.4.x"})
    monkeypatch.setattr(_matrix, "load_matrix", load_matrix)

    versions = CompatibilityMatrix.from_file("compat.toml", table="tool.compat")

    assert load_matrix.calls == [pretend.call("compat.toml", table="tool.compat")]
    assert versions.all() == ["1.0.0"]
    assert versions.recommended_for("2.4.3") == "1.0.0"
