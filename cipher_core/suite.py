# MIT License © 2025 Motohiro Suzuki
"""
cipher_core/suite.py

CipherSuite: immutable attribute tuple

- key_exchange : "ecdhe_rsa", "dhe_dss", "rsa", "psk", ...
- cipher       : bulk cipher, "aes_256_gcm", "3des_ede_cbc", "null", ...
- mac          : "sha", "sha256", "md5", or "aead" for AEAD suites
- prf          : "sha256" / "sha384", or DEFAULT_PRF (= protocol default)

Two suites are equal iff all four attributes match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

DEFAULT_PRF = "default_prf"
NULL_CIPHER = "null"
AEAD_MAC = "aead"


@dataclass(frozen=True)
class CipherSuite:
    key_exchange: str
    cipher: str
    mac: str
    prf: str = DEFAULT_PRF

    @staticmethod
    def from_tuple(t: Sequence[str]) -> "CipherSuite":
        # 3-tuple: PRF absent (protocol default)
        if len(t) == 3:
            return CipherSuite(str(t[0]), str(t[1]), str(t[2]))
        if len(t) == 4:
            return CipherSuite(str(t[0]), str(t[1]), str(t[2]), str(t[3]))
        raise ValueError(f"cipher suite tuple must have 3 or 4 items, got {len(t)}")

    def as_tuple(self) -> tuple[str, str, str, str]:
        return (self.key_exchange, self.cipher, self.mac, self.prf)

    @property
    def is_null_cipher(self) -> bool:
        return self.cipher == NULL_CIPHER

    def __str__(self) -> str:
        return "/".join(self.as_tuple())
