"""Tests for configuration settings and their effect on the helpers."""

from dataclasses import dataclass, field

import pytest

from configure import K, ConfigureSettings, ValueConfigurable, get_settings, use_settings
from configure.core.capability import copy_value


@dataclass
class Bag(ValueConfigurable):
    items: list[str] = field(default_factory=list)
    count: int = 0


def test_defaults():
    settings = ConfigureSettings(_env_file=None)

    assert settings.copy_mode == "deep"
    assert settings.validate_types is True
    assert settings.warn_unresolved_annotations is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CONFIGURE_COPY_MODE", "shallow")
    monkeypatch.setenv("CONFIGURE_VALIDATE_TYPES", "false")

    settings = ConfigureSettings(_env_file=None)

    assert settings.copy_mode == "shallow"
    assert settings.validate_types is False


def test_invalid_copy_mode_rejected():
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        ConfigureSettings(copy_mode="sideways", _env_file=None)


def test_use_settings_restores_previous(default_settings):
    override = ConfigureSettings(copy_mode="shallow", _env_file=None)

    with use_settings(override) as active:
        assert active is override
        assert get_settings() is override

    assert get_settings() is default_settings


def test_use_settings_restores_on_error(default_settings):
    with pytest.raises(RuntimeError):
        with use_settings(ConfigureSettings(copy_mode="shallow", _env_file=None)):
            raise RuntimeError("inside")

    assert get_settings() is default_settings


def test_shallow_copy_mode_shares_nested_values():
    bag = Bag(items=["a"])

    with use_settings(ConfigureSettings(copy_mode="shallow", _env_file=None)):
        result = bag.then(lambda b: b.items.append("b"))

    assert result is not bag
    assert result.items is bag.items
    assert bag.items == ["a", "b"]


def test_deep_copy_mode_isolates_nested_values():
    bag = Bag(items=["a"])

    result = bag.then(lambda b: b.items.append("b"))

    assert bag.items == ["a"]
    assert result.items == ["a", "b"]


def test_copy_value_explicit_mode_wins_over_settings():
    bag = Bag(items=["a"])

    assert copy_value(bag, "shallow").items is bag.items
    assert copy_value(bag, "deep").items is not bag.items


def test_validation_can_be_disabled():
    with use_settings(ConfigureSettings(validate_types=False, _env_file=None)):
        bag = Bag().set(K.count, "many")

    assert bag.count == "many"
