from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from core.config import AppSettings
from core.resources_loader import DEFAULT_GREETING, write_greeting_fixture
from core.services.demo_routines import DemoContext


@dataclass
class Recorder:
    """Collects everything a routine emits, in order."""

    events: list[tuple[str, str]] = field(default_factory=list)

    def context(self, settings: AppSettings) -> DemoContext:
        return DemoContext(
            settings=settings,
            echo=lambda text: self.events.append(("line", text)),
            notice=lambda text: self.events.append(("notice", text)),
            header=lambda text: self.events.append(("header", text)),
        )

    @property
    def lines(self) -> list[str]:
        return [text for kind, text in self.events if kind == "line"]

    @property
    def notices(self) -> list[str]:
        return [text for kind, text in self.events if kind == "notice"]


@pytest.fixture
def greeting_lines() -> list[str]:
    return DEFAULT_GREETING.splitlines()


@pytest.fixture
def greeting_file(tmp_path: Path) -> Path:
    path = tmp_path / "greeting.txt"
    write_greeting_fixture(path)
    return path


@pytest.fixture
def settings(tmp_path: Path, greeting_file: Path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        greeting_path=greeting_file,
        missing_path=tmp_path / "does_not_exist.txt",
        copy_path=tmp_path / "greeting_copy.txt",
    )


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
