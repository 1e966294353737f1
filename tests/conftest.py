"""Shared test fixtures."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest

from archlint.scanner.models import FileSummary, SourceLanguage
from archlint.scanner.parser import parse_file
from archlint.scanner.patterns import PatternTable, build_pattern_table


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def table() -> PatternTable:
    return build_pattern_table()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "ws"
    root.mkdir()
    return root


@pytest.fixture
def write_file(workspace: Path) -> Callable[[str, str], Path]:
    """Write a source file below the workspace root, creating directories."""

    def _write(rel_path: str, source: str) -> Path:
        path = workspace / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source)
        return path

    return _write


@pytest.fixture
def summarize(
    write_file: Callable[[str, str], Path],
    table: PatternTable,
) -> Callable[..., FileSummary]:
    """Write a file and parse it into a FileSummary."""

    def _summarize(source: str, rel_path: str = "app.go") -> FileSummary:
        path = write_file(rel_path, source)
        language = SourceLanguage.from_path(path)
        return parse_file(path, rel_path, language, table)

    return _summarize


@pytest.fixture
def copy_fixture(fixtures_dir: Path, workspace: Path) -> Callable[..., Path]:
    def _copy(name: str, dest: str | None = None) -> Path:
        target = workspace / (dest or name)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy(fixtures_dir / name, target)
        return target

    return _copy


@pytest.fixture
def go_source() -> Callable[[int, int], str]:
    return _go_source


def _go_source(lines: int, exports: int) -> str:
    """A Go file with exactly ``lines`` lines, ``exports`` of them exported funcs."""
    body = ["package big"]
    body += [f"func Exported{i}() {{}}" for i in range(exports)]
    body += ["// filler"] * (lines - len(body))
    return "\n".join(body) + "\n"
