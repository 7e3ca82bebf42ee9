# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import pytest

from cipher_core import policy as policy_mod
from cipher_core.catalog import builtin_catalog
from cipher_core.errors import PolicyError, SelectionError
from cipher_core.policy import SelectionPolicy
from diagnostics.logging_config import setup_logging


def test_defaults() -> None:
    p = SelectionPolicy()
    assert p.unknown_token == "STRICT"
    assert p.catalog_source == "BUILTIN"
    assert p.strict
    assert p.load_catalog() is builtin_catalog()


def test_from_env_normalizes(monkeypatch) -> None:
    monkeypatch.setenv("CIPHER_SUITES_UNKNOWN_TOKEN", " empty ")
    monkeypatch.setenv("CIPHER_SUITES_CATALOG", "builtin")
    p = SelectionPolicy.from_env()
    assert p.unknown_token == "EMPTY"
    assert not p.strict


def test_from_env_without_vars() -> None:
    assert SelectionPolicy.from_env() == SelectionPolicy()


@pytest.mark.parametrize("kwargs", [{"unknown_token": "LOOSE"}, {"catalog_source": "REMOTE"}])
def test_invalid_values(kwargs) -> None:
    with pytest.raises(PolicyError):
        SelectionPolicy(**kwargs)


def test_invalid_env(monkeypatch) -> None:
    monkeypatch.setenv("CIPHER_SUITES_CATALOG", "nope")
    with pytest.raises(SelectionError):
        SelectionPolicy.from_env()


def test_host_source_loads_host_catalog(monkeypatch, tiny) -> None:
    monkeypatch.setattr(policy_mod, "host_catalog", lambda: tiny)
    assert SelectionPolicy(catalog_source="host").load_catalog() is tiny


def test_setup_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        setup_logging("LOUD")
