# MIT License © 2025 Motohiro Suzuki
"""
cipher_core/catalog.py

Catalog of known cipher suites + host suite-name lookup

- SuiteCatalog is read-only: ordered `suites` (tie-break order everywhere),
  the smaller `defaults` set, and the OpenSSL-name table used for exact
  suite-name lookup.
- builtin_catalog(): classic TLS <= 1.2 suites, strongest first.
- host_catalog(): suites enabled in the interpreter's `ssl` module, resolved
  through the built-in name table.

Name lookup is independent of `suites`: a well-known name resolves even when
a test harness replaces the catalog with a synthetic one.
"""

from __future__ import annotations

import functools
import logging
import ssl
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Sequence

from cipher_core.errors import CatalogError
from cipher_core.suite import CipherSuite, DEFAULT_PRF as D

logger = logging.getLogger(__name__)


# (openssl name, key exchange, cipher, mac, prf)
_BUILTIN_TABLE: tuple[tuple[str, str, str, str, str], ...] = (
    # AES-256 (TLS 1.2)
    ("ECDHE-ECDSA-AES256-GCM-SHA384", "ecdhe_ecdsa", "aes_256_gcm", "aead", "sha384"),
    ("ECDHE-RSA-AES256-GCM-SHA384", "ecdhe_rsa", "aes_256_gcm", "aead", "sha384"),
    ("ECDHE-ECDSA-AES256-SHA384", "ecdhe_ecdsa", "aes_256_cbc", "sha384", "sha384"),
    ("ECDHE-RSA-AES256-SHA384", "ecdhe_rsa", "aes_256_cbc", "sha384", "sha384"),
    ("ECDH-ECDSA-AES256-GCM-SHA384", "ecdh_ecdsa", "aes_256_gcm", "aead", "sha384"),
    ("ECDH-RSA-AES256-GCM-SHA384", "ecdh_rsa", "aes_256_gcm", "aead", "sha384"),
    ("ECDH-ECDSA-AES256-SHA384", "ecdh_ecdsa", "aes_256_cbc", "sha384", "sha384"),
    ("ECDH-RSA-AES256-SHA384", "ecdh_rsa", "aes_256_cbc", "sha384", "sha384"),
    ("ECDHE-ECDSA-CHACHA20-POLY1305", "ecdhe_ecdsa", "chacha20_poly1305", "aead", "sha256"),
    ("ECDHE-RSA-CHACHA20-POLY1305", "ecdhe_rsa", "chacha20_poly1305", "aead", "sha256"),
    ("DHE-RSA-CHACHA20-POLY1305", "dhe_rsa", "chacha20_poly1305", "aead", "sha256"),
    ("DHE-RSA-AES256-GCM-SHA384", "dhe_rsa", "aes_256_gcm", "aead", "sha384"),
    ("DHE-DSS-AES256-GCM-SHA384", "dhe_dss", "aes_256_gcm", "aead", "sha384"),
    ("DHE-RSA-AES256-SHA256", "dhe_rsa", "aes_256_cbc", "sha256", D),
    ("DHE-DSS-AES256-SHA256", "dhe_dss", "aes_256_cbc", "sha256", D),
    ("AES256-GCM-SHA384", "rsa", "aes_256_gcm", "aead", "sha384"),
    ("AES256-SHA256", "rsa", "aes_256_cbc", "sha256", D),
    # AES-128 (TLS 1.2)
    ("ECDHE-ECDSA-AES128-GCM-SHA256", "ecdhe_ecdsa", "aes_128_gcm", "aead", "sha256"),
    ("ECDHE-RSA-AES128-GCM-SHA256", "ecdhe_rsa", "aes_128_gcm", "aead", "sha256"),
    ("ECDHE-ECDSA-AES128-SHA256", "ecdhe_ecdsa", "aes_128_cbc", "sha256", "sha256"),
    ("ECDHE-RSA-AES128-SHA256", "ecdhe_rsa", "aes_128_cbc", "sha256", "sha256"),
    ("ECDH-ECDSA-AES128-GCM-SHA256", "ecdh_ecdsa", "aes_128_gcm", "aead", "sha256"),
    ("ECDH-RSA-AES128-GCM-SHA256", "ecdh_rsa", "aes_128_gcm", "aead", "sha256"),
    ("ECDH-ECDSA-AES128-SHA256", "ecdh_ecdsa", "aes_128_cbc", "sha256", "sha256"),
    ("ECDH-RSA-AES128-SHA256", "ecdh_rsa", "aes_128_cbc", "sha256", "sha256"),
    ("DHE-RSA-AES128-GCM-SHA256", "dhe_rsa", "aes_128_gcm", "aead", "sha256"),
    ("DHE-DSS-AES128-GCM-SHA256", "dhe_dss", "aes_128_gcm", "aead", "sha256"),
    ("DHE-RSA-AES128-SHA256", "dhe_rsa", "aes_128_cbc", "sha256", D),
    ("DHE-DSS-AES128-SHA256", "dhe_dss", "aes_128_cbc", "sha256", D),
    ("AES128-GCM-SHA256", "rsa", "aes_128_gcm", "aead", "sha256"),
    ("AES128-SHA256", "rsa", "aes_128_cbc", "sha256", D),
    # SSLv3 / TLS 1.0 era
    ("ECDHE-ECDSA-AES256-SHA", "ecdhe_ecdsa", "aes_256_cbc", "sha", D),
    ("ECDHE-RSA-AES256-SHA", "ecdhe_rsa", "aes_256_cbc", "sha", D),
    ("DHE-RSA-AES256-SHA", "dhe_rsa", "aes_256_cbc", "sha", D),
    ("DHE-DSS-AES256-SHA", "dhe_dss", "aes_256_cbc", "sha", D),
    ("ECDH-ECDSA-AES256-SHA", "ecdh_ecdsa", "aes_256_cbc", "sha", D),
    ("ECDH-RSA-AES256-SHA", "ecdh_rsa", "aes_256_cbc", "sha", D),
    ("AES256-SHA", "rsa", "aes_256_cbc", "sha", D),
    ("ECDHE-ECDSA-DES-CBC3-SHA", "ecdhe_ecdsa", "3des_ede_cbc", "sha", D),
    ("ECDHE-RSA-DES-CBC3-SHA", "ecdhe_rsa", "3des_ede_cbc", "sha", D),
    ("EDH-RSA-DES-CBC3-SHA", "dhe_rsa", "3des_ede_cbc", "sha", D),
    ("EDH-DSS-DES-CBC3-SHA", "dhe_dss", "3des_ede_cbc", "sha", D),
    ("ECDH-ECDSA-DES-CBC3-SHA", "ecdh_ecdsa", "3des_ede_cbc", "sha", D),
    ("ECDH-RSA-DES-CBC3-SHA", "ecdh_rsa", "3des_ede_cbc", "sha", D),
    ("DES-CBC3-SHA", "rsa", "3des_ede_cbc", "sha", D),
    ("ECDHE-ECDSA-AES128-SHA", "ecdhe_ecdsa", "aes_128_cbc", "sha", D),
    ("ECDHE-RSA-AES128-SHA", "ecdhe_rsa", "aes_128_cbc", "sha", D),
    ("DHE-RSA-AES128-SHA", "dhe_rsa", "aes_128_cbc", "sha", D),
    ("DHE-DSS-AES128-SHA", "dhe_dss", "aes_128_cbc", "sha", D),
    ("ECDH-ECDSA-AES128-SHA", "ecdh_ecdsa", "aes_128_cbc", "sha", D),
    ("ECDH-RSA-AES128-SHA", "ecdh_rsa", "aes_128_cbc", "sha", D),
    ("AES128-SHA", "rsa", "aes_128_cbc", "sha", D),
    ("IDEA-CBC-SHA", "rsa", "idea_cbc", "sha", D),
    ("ECDHE-ECDSA-RC4-SHA", "ecdhe_ecdsa", "rc4_128", "sha", D),
    ("ECDHE-RSA-RC4-SHA", "ecdhe_rsa", "rc4_128", "sha", D),
    ("ECDH-ECDSA-RC4-SHA", "ecdh_ecdsa", "rc4_128", "sha", D),
    ("ECDH-RSA-RC4-SHA", "ecdh_rsa", "rc4_128", "sha", D),
    ("RC4-SHA", "rsa", "rc4_128", "sha", D),
    ("RC4-MD5", "rsa", "rc4_128", "md5", D),
    ("EDH-RSA-DES-CBC-SHA", "dhe_rsa", "des_cbc", "sha", D),
    ("EDH-DSS-DES-CBC-SHA", "dhe_dss", "des_cbc", "sha", D),
    ("DES-CBC-SHA", "rsa", "des_cbc", "sha", D),
    # anonymous
    ("ADH-AES256-GCM-SHA384", "dh_anon", "aes_256_gcm", "aead", "sha384"),
    ("ADH-AES256-SHA256", "dh_anon", "aes_256_cbc", "sha256", D),
    ("AECDH-AES256-SHA", "ecdh_anon", "aes_256_cbc", "sha", D),
    ("ADH-AES256-SHA", "dh_anon", "aes_256_cbc", "sha", D),
    ("ADH-AES128-GCM-SHA256", "dh_anon", "aes_128_gcm", "aead", "sha256"),
    ("ADH-AES128-SHA256", "dh_anon", "aes_128_cbc", "sha256", D),
    ("AECDH-AES128-SHA", "ecdh_anon", "aes_128_cbc", "sha", D),
    ("ADH-AES128-SHA", "dh_anon", "aes_128_cbc", "sha", D),
    ("AECDH-DES-CBC3-SHA", "ecdh_anon", "3des_ede_cbc", "sha", D),
    ("ADH-DES-CBC3-SHA", "dh_anon", "3des_ede_cbc", "sha", D),
    ("AECDH-RC4-SHA", "ecdh_anon", "rc4_128", "sha", D),
    ("ADH-RC4-MD5", "dh_anon", "rc4_128", "md5", D),
    ("ADH-DES-CBC-SHA", "dh_anon", "des_cbc", "sha", D),
    # PSK
    ("PSK-AES256-GCM-SHA384", "psk", "aes_256_gcm", "aead", "sha384"),
    ("PSK-AES256-CBC-SHA384", "psk", "aes_256_cbc", "sha384", "sha384"),
    ("PSK-AES128-GCM-SHA256", "psk", "aes_128_gcm", "aead", "sha256"),
    ("PSK-AES128-CBC-SHA256", "psk", "aes_128_cbc", "sha256", "sha256"),
    ("PSK-AES256-CBC-SHA", "psk", "aes_256_cbc", "sha", D),
    ("PSK-AES128-CBC-SHA", "psk", "aes_128_cbc", "sha", D),
    ("PSK-3DES-EDE-CBC-SHA", "psk", "3des_ede_cbc", "sha", D),
    ("PSK-RC4-SHA", "psk", "rc4_128", "sha", D),
    ("DHE-PSK-AES256-CBC-SHA", "dhe_psk", "aes_256_cbc", "sha", D),
    ("DHE-PSK-AES128-CBC-SHA", "dhe_psk", "aes_128_cbc", "sha", D),
    ("DHE-PSK-3DES-EDE-CBC-SHA", "dhe_psk", "3des_ede_cbc", "sha", D),
    ("DHE-PSK-RC4-SHA", "dhe_psk", "rc4_128", "sha", D),
    ("RSA-PSK-AES256-CBC-SHA", "rsa_psk", "aes_256_cbc", "sha", D),
    ("RSA-PSK-AES128-CBC-SHA", "rsa_psk", "aes_128_cbc", "sha", D),
    ("RSA-PSK-3DES-EDE-CBC-SHA", "rsa_psk", "3des_ede_cbc", "sha", D),
    ("RSA-PSK-RC4-SHA", "rsa_psk", "rc4_128", "sha", D),
    # SRP
    ("SRP-AES-256-CBC-SHA", "srp_anon", "aes_256_cbc", "sha", D),
    ("SRP-RSA-AES-256-CBC-SHA", "srp_rsa", "aes_256_cbc", "sha", D),
    ("SRP-DSS-AES-256-CBC-SHA", "srp_dss", "aes_256_cbc", "sha", D),
    ("SRP-AES-128-CBC-SHA", "srp_anon", "aes_128_cbc", "sha", D),
    ("SRP-RSA-AES-128-CBC-SHA", "srp_rsa", "aes_128_cbc", "sha", D),
    ("SRP-DSS-AES-128-CBC-SHA", "srp_dss", "aes_128_cbc", "sha", D),
    ("SRP-3DES-EDE-CBC-SHA", "srp_anon", "3des_ede_cbc", "sha", D),
    ("SRP-RSA-3DES-EDE-CBC-SHA", "srp_rsa", "3des_ede_cbc", "sha", D),
    ("SRP-DSS-3DES-EDE-CBC-SHA", "srp_dss", "3des_ede_cbc", "sha", D),
    # null ciphers
    ("ECDHE-ECDSA-NULL-SHA", "ecdhe_ecdsa", "null", "sha", D),
    ("ECDHE-RSA-NULL-SHA", "ecdhe_rsa", "null", "sha", D),
    ("ECDH-ECDSA-NULL-SHA", "ecdh_ecdsa", "null", "sha", D),
    ("ECDH-RSA-NULL-SHA", "ecdh_rsa", "null", "sha", D),
    ("AECDH-NULL-SHA", "ecdh_anon", "null", "sha", D),
    ("NULL-SHA256", "rsa", "null", "sha256", D),
    ("NULL-SHA", "rsa", "null", "sha", D),
    ("NULL-MD5", "rsa", "null", "md5", D),
    ("PSK-NULL-SHA384", "psk", "null", "sha384", "sha384"),
    ("PSK-NULL-SHA256", "psk", "null", "sha256", "sha256"),
    ("PSK-NULL-SHA", "psk", "null", "sha", D),
)

# certificate-authenticated key exchanges offered by default
_DEFAULT_KEY_EXCHANGES = frozenset(
    {"ecdhe_ecdsa", "ecdhe_rsa", "ecdh_ecdsa", "ecdh_rsa", "dhe_rsa", "dhe_dss", "rsa"}
)
_DEFAULT_CIPHERS = frozenset(
    {"aes_128_cbc", "aes_128_gcm", "aes_256_cbc", "aes_256_gcm", "chacha20_poly1305"}
)

BUILTIN_NAMES: Mapping[str, CipherSuite] = MappingProxyType(
    {name: CipherSuite(kx, c, mac, prf) for name, kx, c, mac, prf in _BUILTIN_TABLE}
)


@dataclass(frozen=True)
class SuiteCatalog:
    suites: tuple[CipherSuite, ...]
    defaults: tuple[CipherSuite, ...] = ()
    names: Mapping[str, CipherSuite] = field(default_factory=lambda: BUILTIN_NAMES, compare=False, repr=False)

    def __post_init__(self) -> None:
        # accept any iterable, store immutable
        # duplicates keep their first position
        object.__setattr__(self, "suites", tuple(dict.fromkeys(self.suites)))
        object.__setattr__(self, "defaults", tuple(dict.fromkeys(self.defaults)))
        for s in self.suites + self.defaults:
            if not isinstance(s, CipherSuite):
                raise TypeError(f"catalog entries must be CipherSuite, got {type(s).__name__}")
        object.__setattr__(self, "_default_set", frozenset(self.defaults))
        object.__setattr__(self, "_by_suite", {s: n for n, s in self.names.items()})

    @staticmethod
    def from_tuples(
        all_suites: Iterable[Sequence[str]],
        default_suites: Iterable[Sequence[str]] = (),
        *,
        names: Optional[Mapping[str, CipherSuite]] = None,
    ) -> "SuiteCatalog":
        return SuiteCatalog(
            suites=tuple(CipherSuite.from_tuple(t) for t in all_suites),
            defaults=tuple(CipherSuite.from_tuple(t) for t in default_suites),
            names=BUILTIN_NAMES if names is None else MappingProxyType(dict(names)),
        )

    @property
    def default_set(self) -> frozenset[CipherSuite]:
        return self._default_set  # type: ignore[attr-defined]

    def lookup(self, name: str) -> Optional[CipherSuite]:
        return self.names.get(name)

    def name_of(self, suite: CipherSuite) -> Optional[str]:
        return self._by_suite.get(suite)  # type: ignore[attr-defined]

    def __len__(self) -> int:
        return len(self.suites)

    def __iter__(self) -> Iterator[CipherSuite]:
        return iter(self.suites)


def _is_builtin_default(s: CipherSuite) -> bool:
    return s.key_exchange in _DEFAULT_KEY_EXCHANGES and s.cipher in _DEFAULT_CIPHERS


_BUILTIN = SuiteCatalog(
    suites=tuple(BUILTIN_NAMES.values()),
    defaults=tuple(s for s in BUILTIN_NAMES.values() if _is_builtin_default(s)),
)


def builtin_catalog() -> SuiteCatalog:
    return _BUILTIN


def _resolve_host_ciphers(entries: list[dict], source: str) -> tuple[CipherSuite, ...]:
    out: list[CipherSuite] = []
    seen: set[CipherSuite] = set()
    for entry in entries:
        name = str(entry.get("name", ""))
        suite = BUILTIN_NAMES.get(name)
        if suite is None:
            logger.debug("host cipher %r (%s) has no attribute tuple; skipped", name, source)
            continue
        if suite not in seen:
            seen.add(suite)
            out.append(suite)
    return tuple(out)


@functools.lru_cache(maxsize=None)
def host_catalog(cipher_string: str = "ALL:COMPLEMENTOFALL") -> SuiteCatalog:
    """
    Catalog of the suites the interpreter's OpenSSL build enables for
    `cipher_string`. Defaults are the suites of ssl.create_default_context().
    """
    ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    try:
        ctx.set_ciphers(cipher_string)
    except ssl.SSLError as e:
        raise CatalogError(f"host TLS library rejected cipher string {cipher_string!r}: {e}") from e

    suites = _resolve_host_ciphers(ctx.get_ciphers(), "all")
    default_ctx = ssl.create_default_context()
    available = frozenset(suites)
    defaults = tuple(s for s in _resolve_host_ciphers(default_ctx.get_ciphers(), "default") if s in available)

    logger.info(
        "host catalog (%s): %d suites, %d defaults",
        ssl.OPENSSL_VERSION,
        len(suites),
        len(defaults),
    )
    return SuiteCatalog(suites=suites, defaults=defaults)
