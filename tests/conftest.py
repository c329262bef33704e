import pytest


@pytest.fixture
def write_input(tmp_path):
    """Write lines (newline-terminated) to an input file and return its path."""
    def _write(lines, name="containers.log"):
        path = tmp_path / name
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def output_dir(tmp_path):
    path = tmp_path / "containers"
    path.mkdir()
    return path
