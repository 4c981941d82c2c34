import pytest

from version_compat import CompatibilityMatrix


@pytest.fixture
def raw_matrix():
    return {
        "v1.0.1": "1.5.2-R0.1",
        "v1.0.2-beta": ">1.5.2-R0.2 <1.6.5",
        "v1.0.3": ">=1.6.0-0 <1.7.0-0",
        "v1.0.4": "1.7.x",
    }


@pytest.fixture
def versions(raw_matrix):
    return CompatibilityMatrix(raw_matrix)


@pytest.fixture
def matrix_file(tmp_path):
    def _matrix_file(name, contents):
        path = tmp_path / name
        path.write_text(contents, encoding="utf-8")
        return path

    return _matrix_file
