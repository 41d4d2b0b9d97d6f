from __future__ import annotations

from pathlib import Path

import pytest

from hhserver.exceptions import InvalidRootError, ValidationError
from hhserver.wwwroot import assert_www_directory


def test_assert_www_directory_accepts_root_with_hhconfig(project_root: Path) -> None:
    assert_www_directory(project_root)


def test_assert_www_directory_rejects_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "nope"
    with pytest.raises(InvalidRootError) as exc:
        assert_www_directory(missing)
    assert exc.value.root == missing
    assert "not a directory" in str(exc.value)


def test_assert_www_directory_rejects_directory_without_hhconfig(tmp_path: Path) -> None:
    with pytest.raises(ValidationError) as exc:
        assert_www_directory(tmp_path)
    assert ".hhconfig" in str(exc.value)


def test_assert_www_directory_rejects_file_root(tmp_path: Path) -> None:
    target = tmp_path / "file.php"
    target.write_text("<?hh\n", encoding="utf-8")
    with pytest.raises(InvalidRootError):
        assert_www_directory(target)
