# MIT License © 2025 Motohiro Suzuki
"""
cipher_core/policy.py

Selection policy

Chosen by environment variables (or constructed explicitly):
- CIPHER_SUITES_UNKNOWN_TOKEN:
    - STRICT (default): a token that is neither a suite name nor a keyword
      combination raises UnrecognizedTokenError
    - EMPTY: such a token matches nothing (logged as a warning)
- CIPHER_SUITES_CATALOG:
    - BUILTIN (default): built-in suite table
    - HOST: suites enabled by the interpreter's `ssl` module
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from cipher_core.catalog import SuiteCatalog, builtin_catalog, host_catalog
from cipher_core.errors import PolicyError

UNKNOWN_TOKEN_POLICIES = ("STRICT", "EMPTY")
CATALOG_SOURCES = ("BUILTIN", "HOST")


@dataclass(frozen=True)
class SelectionPolicy:
    unknown_token: str = "STRICT"
    catalog_source: str = "BUILTIN"

    def __post_init__(self) -> None:
        ut = str(self.unknown_token).strip().upper()
        cs = str(self.catalog_source).strip().upper()
        if ut not in UNKNOWN_TOKEN_POLICIES:
            raise PolicyError(f"unknown_token must be one of {UNKNOWN_TOKEN_POLICIES}, got {self.unknown_token!r}")
        if cs not in CATALOG_SOURCES:
            raise PolicyError(f"catalog_source must be one of {CATALOG_SOURCES}, got {self.catalog_source!r}")
        object.__setattr__(self, "unknown_token", ut)
        object.__setattr__(self, "catalog_source", cs)

    @staticmethod
    def from_env() -> "SelectionPolicy":
        return SelectionPolicy(
            unknown_token=os.getenv("CIPHER_SUITES_UNKNOWN_TOKEN", "STRICT"),
            catalog_source=os.getenv("CIPHER_SUITES_CATALOG", "BUILTIN"),
        )

    @property
    def strict(self) -> bool:
        return self.unknown_token == "STRICT"

    def load_catalog(self) -> SuiteCatalog:
        if self.catalog_source == "HOST":
            return host_catalog()
        return builtin_catalog()
