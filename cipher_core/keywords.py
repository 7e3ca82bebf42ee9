# MIT License © 2025 Motohiro Suzuki
"""
cipher_core/keywords.py

OpenSSL cipher-string keywords as closed-form predicates

- Attribute families (HIGH / MEDIUM / LOW) and the @STRENGTH table are
  static data.
- Each keyword maps to a predicate `(suite, catalog) -> bool`. Only the
  catalog-relative keywords (ALL, COMPLEMENTOFDEFAULT) look at the catalog.
- Keywords without an equivalent in the catalog (GOST, SEED, Camellia, ...)
  map to NOTHING: they resolve to the empty set instead of failing.
- "DEFAULT" has no entry on purpose. It is only meaningful as the first
  token and is rewritten by the evaluator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Iterable, Optional

from cipher_core.suite import AEAD_MAC, DEFAULT_PRF, NULL_CIPHER, CipherSuite

if TYPE_CHECKING:
    from cipher_core.catalog import SuiteCatalog


Predicate = Callable[[CipherSuite, "SuiteCatalog"], bool]


HIGH = frozenset({"aes_128_cbc", "aes_128_gcm", "aes_256_cbc", "aes_256_gcm", "chacha20_poly1305"})
MEDIUM = frozenset({"rc4_128", "idea_cbc", "3des_ede_cbc"})
LOW = frozenset({"des40_cbc", "des_cbc"})

# effective key size in bits, used by @STRENGTH only
STRENGTH: Dict[str, int] = {
    NULL_CIPHER: 0,
    "rc4_128": 128,
    "idea_cbc": 128,
    "des40_cbc": 40,
    "des_cbc": 56,
    # 3DES counts as 112 bits (meet-in-the-middle), not its 168-bit key
    "3des_ede_cbc": 112,
    "aes_128_cbc": 128,
    "aes_256_cbc": 256,
    "aes_128_gcm": 128,
    "aes_256_gcm": 256,
    "chacha20_poly1305": 256,
}


def strength(suite: CipherSuite) -> int:
    return STRENGTH.get(suite.cipher, 0)


# -----------------------------
# predicate builders
# -----------------------------

def with_key_exchange(*kx: str) -> Predicate:
    s = frozenset(kx)
    return lambda suite, _cat: suite.key_exchange in s


def with_cipher(*ciphers: str) -> Predicate:
    s = frozenset(ciphers)
    return lambda suite, _cat: suite.cipher in s


def with_mac(*macs: str) -> Predicate:
    s = frozenset(macs)
    return lambda suite, _cat: suite.mac in s


def match_all(kx: Iterable[str], ciphers: Iterable[str], macs: Iterable[str], prfs: Iterable[str]) -> Predicate:
    k, c, m, p = frozenset(kx), frozenset(ciphers), frozenset(macs), frozenset(prfs)
    return lambda s, _cat: s.key_exchange in k and s.cipher in c and s.mac in m and s.prf in p


def match_any(kx: Iterable[str], ciphers: Iterable[str], macs: Iterable[str], prfs: Iterable[str]) -> Predicate:
    k, c, m, p = frozenset(kx), frozenset(ciphers), frozenset(macs), frozenset(prfs)
    return lambda s, _cat: s.key_exchange in k or s.cipher in c or s.mac in m or s.prf in p


def NOTHING(_suite: CipherSuite, _cat: "SuiteCatalog") -> bool:
    return False


def _all(suite: CipherSuite, _cat: "SuiteCatalog") -> bool:
    return suite.cipher != NULL_CIPHER


def _complement_of_default(suite: CipherSuite, cat: "SuiteCatalog") -> bool:
    return _all(suite, cat) and suite not in cat.default_set


# -----------------------------
# version keywords
# -----------------------------

# Baseline suites: no AEAD, fixed PRF. ECC suites are technically usable
# with SSLv3 even though many stacks only added them with TLS 1.0.
_SSLV3 = match_all(
    kx=(
        "ecdhe_ecdsa", "ecdhe_rsa", "ecdh_ecdsa", "ecdh_rsa", "dhe_rsa", "dhe_dss", "rsa",
        "dh_anon", "ecdh_anon", "dhe_psk", "rsa_psk", "psk", "srp_anon", "srp_rsa", "srp_dss",
    ),
    ciphers=("aes_256_cbc", "3des_ede_cbc", "aes_128_cbc", "des_cbc", "rc4_128", NULL_CIPHER),
    macs=("sha", "md5"),
    prfs=(DEFAULT_PRF,),
)

# TLS 1.2 adds AEAD ciphers, HMAC-SHA256/384 and negotiable PRFs
_TLSV12 = match_any(
    kx=(),
    ciphers=("chacha20_poly1305", "aes_256_gcm", "aes_128_gcm"),
    macs=(AEAD_MAC, "sha256", "sha384"),
    prfs=("sha256", "sha384"),
)


KEYWORDS: Dict[str, Predicate] = {
    "ALL": _all,
    "COMPLEMENTOFALL": with_cipher(NULL_CIPHER),
    "COMPLEMENTOFDEFAULT": _complement_of_default,
    "HIGH": with_cipher(*HIGH),
    "MEDIUM": with_cipher(*MEDIUM),
    "LOW": with_cipher(*LOW),
    "eNULL": with_cipher(NULL_CIPHER),
    "aNULL": with_key_exchange("dh_anon", "ecdh_anon"),
    # key exchange / authentication
    "kRSA": with_key_exchange("rsa"),
    "aRSA": with_key_exchange("rsa", "dhe_rsa", "srp_rsa", "ecdhe_rsa"),
    "kDHr": with_key_exchange("dh_rsa"),
    "kDHd": with_key_exchange("dh_dss"),
    "kDH": with_key_exchange("dh_rsa", "dh_dss"),
    "kDHE": with_key_exchange("dhe_rsa", "dhe_dss", "dh_anon", "dhe_psk"),
    "DH": with_key_exchange("dh_rsa", "dh_dss", "dhe_rsa", "dhe_dss", "dh_anon", "dhe_psk"),
    "DHE": with_key_exchange("dhe_rsa", "dhe_dss", "dhe_psk"),
    "ADH": with_key_exchange("dh_anon"),
    "kEECDH": with_key_exchange("ecdhe_rsa", "ecdhe_ecdsa", "ecdh_anon"),
    "kECDHr": with_key_exchange("ecdh_rsa"),
    "kECDHe": with_key_exchange("ecdh_ecdsa"),
    "kECDH": with_key_exchange("ecdh_rsa", "ecdh_ecdsa"),
    "aECDH": with_key_exchange("ecdh_rsa", "ecdh_ecdsa"),
    "ECDH": with_key_exchange("ecdhe_rsa", "ecdhe_ecdsa", "ecdh_rsa", "ecdh_ecdsa", "ecdh_anon"),
    "ECDHE": with_key_exchange("ecdhe_rsa", "ecdhe_ecdsa"),
    "AECDH": with_key_exchange("ecdh_anon"),
    "aDSS": with_key_exchange("dhe_dss", "srp_dss"),
    "aDH": with_key_exchange("dh_rsa", "dh_dss"),
    "aECDSA": with_key_exchange("ecdhe_ecdsa"),
    # protocol versions
    "SSLv3": _SSLV3,
    "TLSv1.0": NOTHING,
    "TLSv1.2": _TLSV12,
    # bulk ciphers
    "AES128": with_cipher("aes_128_cbc", "aes_128_gcm"),
    "AES256": with_cipher("aes_256_cbc", "aes_256_gcm"),
    "AES": with_cipher("aes_128_cbc", "aes_128_gcm", "aes_256_cbc", "aes_256_gcm"),
    "AESGCM": with_cipher("aes_128_gcm", "aes_256_gcm"),
    "CHACHA20": with_cipher("chacha20_poly1305"),
    "3DES": with_cipher("3des_ede_cbc"),
    "DES": with_cipher("des_cbc"),
    "RC4": with_cipher("rc4_128"),
    "IDEA": with_cipher("idea_cbc"),
    # MAC / hash
    "MD5": with_mac("md5"),
    "SHA1": with_mac("sha"),
    "SHA256": with_mac("sha256"),
    "SHA384": with_mac("sha384"),
    # PSK / SRP
    "kPSK": with_key_exchange("psk"),
    "kDHEPSK": with_key_exchange("dhe_psk"),
    "kRSAPSK": with_key_exchange("rsa_psk"),
    "aPSK": with_key_exchange("psk", "dhe_psk", "rsa_psk"),
    "kSRP": with_key_exchange("srp", "srp_rsa", "srp_dss", "srp_anon"),
    "aSRP": with_key_exchange("srp_anon"),
}

ALIASES: Dict[str, str] = {
    "NULL": "eNULL",
    "RSA": "kRSA",
    "kEDH": "kDHE",
    "EDH": "DHE",
    "kECDHE": "kEECDH",
    "EECDH": "ECDHE",
    "DSS": "aDSS",
    "ECDSA": "aECDSA",
    "TLSv1": "TLSv1.0",
    "SHA": "SHA1",
    "PSK": "kPSK",
    "SRP": "kSRP",
}

# no equivalent in the catalog -> empty set
UNSUPPORTED = frozenset({
    "AESCCM", "AESCCM8",
    "CAMELLIA128", "CAMELLIA256", "CAMELLIA",
    "RC2", "SEED",
    "aGOST", "aGOST01", "kGOST", "GOST94", "GOST89MAC",
    "kECDHEPSK",
    "EXPORT", "EXP", "EXPORT40", "EXPORT56",
})


def keyword_predicate(name: str) -> Optional[Predicate]:
    """Predicate for a single keyword, or None if the keyword is unknown."""
    if name in UNSUPPORTED:
        return NOTHING
    return KEYWORDS.get(ALIASES.get(name, name))


def known_keywords() -> list[str]:
    return sorted(set(KEYWORDS) | set(ALIASES) | UNSUPPORTED)
