import sys
from pathlib import Path
from typing import Callable

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

from lisensor.models import Rule  # noqa: E402


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.chdir(root)
    return Path.cwd()


@pytest.fixture
def write_file() -> Callable[[Path, str], Path]:
    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def make_rule() -> Callable[..., Rule]:
    def _make(
        holder: str = "Acme",
        license: str = "MIT",
        pattern: str = "/repo/src/**/*.rs",
        order: int = 0,
        origin: str = "<inline>",
    ) -> Rule:
        return Rule(
            holder=holder,
            license=license,
            pattern=pattern,
            origin=origin,
            order=order,
        )

    return _make


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
