# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import pytest

from cipher_core.catalog import SuiteCatalog, builtin_catalog
from cipher_core.policy import SelectionPolicy

TINY_ALL = [
    ("ecdhe_rsa", "aes_256_gcm", "aead", "sha384"),
    ("ecdhe_rsa", "aes_128_cbc", "sha"),
    ("dhe_rsa", "chacha20_poly1305", "aead", "sha256"),
    ("rsa", "3des_ede_cbc", "sha"),
    ("rsa", "rc4_128", "md5"),
    ("dhe_rsa", "des_cbc", "sha"),
    ("rsa", "null", "sha"),
]
TINY_DEFAULT = TINY_ALL[:3]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CIPHER_SUITES_UNKNOWN_TOKEN", raising=False)
    monkeypatch.delenv("CIPHER_SUITES_CATALOG", raising=False)


@pytest.fixture
def catalog() -> SuiteCatalog:
    return builtin_catalog()


@pytest.fixture
def tiny() -> SuiteCatalog:
    return SuiteCatalog.from_tuples(TINY_ALL, TINY_DEFAULT)


@pytest.fixture
def strict() -> SelectionPolicy:
    return SelectionPolicy(unknown_token="STRICT")


@pytest.fixture
def lenient() -> SelectionPolicy:
    return SelectionPolicy(unknown_token="EMPTY")
