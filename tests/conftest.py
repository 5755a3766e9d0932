"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass, field

from configure import Configurable, ConfigureSettings, ValueConfigurable, use_settings


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test with default settings, independent of CONFIGURE_* env vars."""
    settings = ConfigureSettings(
        copy_mode="deep",
        validate_types=True,
        warn_unresolved_annotations=True,
        _env_file=None,
    )
    with use_settings(settings):
        yield settings


class FixtureLabel(Configurable):
    text: str
    alignment: str

    def __init__(self, text: str = "", alignment: str = "left") -> None:
        self.text = text
        self.alignment = alignment


@dataclass
class FixturePoint(ValueConfigurable):
    x: int = 0
    y: int = 0


@dataclass
class FixtureFrame(ValueConfigurable):
    origin: FixturePoint = field(default_factory=FixturePoint)
    width: float = 0.0
    tags: list[str] = field(default_factory=list)


@pytest.fixture
def label_cls():
    return FixtureLabel


@pytest.fixture
def point_cls():
    return FixturePoint


@pytest.fixture
def frame_cls():
    return FixtureFrame
