"""Shared fixtures for scopehound tests."""

import sys
from pathlib import Path

import pytest


class RecordingLog:
    """Log sink that keeps every message for assertions."""

    def __init__(self) -> None:
        self.infos: list[str] = []
        self.errors: list[str] = []

    def info(self, *args) -> None:
        self.infos.append(" ".join(str(a) for a in args))

    def err(self, *args) -> None:
        self.errors.append(" ".join(str(a) for a in args))


class StaticTextProvider:
    """Text provider serving in-memory files; unknown paths raise OSError."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files = {str(Path(k)): v for k, v in (files or {}).items()}
        self.opened: list[str] = []

    def open(self, path):
        self.opened.append(str(path))
        try:
            return self.files[str(path)].splitlines()
        except KeyError:
            raise FileNotFoundError(f"No such file: {path}") from None


@pytest.fixture
def log() -> RecordingLog:
    return RecordingLog()


@pytest.fixture
def text_provider_factory():
    return StaticTextProvider


@pytest.fixture
def make_fake_cscope(tmp_path: Path):
    """Write an executable that stands in for cscope.

    Each run appends ``<cwd>\\t<args>`` to ``<name>.calls``. If the working
    directory contains ``fake_output.txt`` its content is printed, otherwise
    ``stdout``; then ``stderr`` is written and the script exits with
    ``exit_code``.
    """
    if sys.platform == "win32":
        pytest.skip("fake cscope relies on a shebang script")

    def _make(stdout: str = "", stderr: str = "", exit_code: int = 0, name: str = "fake-cscope"):
        script = tmp_path / name
        calls = tmp_path / f"{name}.calls"
        script.write_text(
            f"#!{sys.executable}\n"
            "import os, sys\n"
            f"with open({str(calls)!r}, 'a') as fh:\n"
            "    fh.write(os.getcwd() + '\\t' + ' '.join(sys.argv[1:]) + '\\n')\n"
            "if os.path.exists('fake_output.txt'):\n"
            "    with open('fake_output.txt') as fh:\n"
            "        sys.stdout.write(fh.read())\n"
            "else:\n"
            f"    sys.stdout.write({stdout!r})\n"
            f"sys.stderr.write({stderr!r})\n"
            f"sys.exit({exit_code})\n",
            encoding="utf-8",
        )
        script.chmod(0o755)
        return script, calls

    return _make
