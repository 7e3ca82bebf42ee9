# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import logging

import pytest

from cipher_core.errors import UnrecognizedTokenError
from cipher_core.keywords import ALIASES, HIGH, LOW, MEDIUM, UNSUPPORTED
from cipher_core.suite import CipherSuite
from selection.classifier import classify


def test_suite_name_resolves_to_single_suite(catalog) -> None:
    assert classify("ECDHE-RSA-AES256-SHA", catalog) == [CipherSuite("ecdhe_rsa", "aes_256_cbc", "sha")]


def test_suite_name_resolves_even_outside_catalog(tiny) -> None:
    # host lookup does not depend on the catalog contents
    assert classify("DHE-DSS-AES128-SHA", tiny) == [CipherSuite("dhe_dss", "aes_128_cbc", "sha")]


def test_all_and_complement(catalog) -> None:
    all_ = classify("ALL", catalog)
    comp = classify("COMPLEMENTOFALL", catalog)
    assert all(not s.is_null_cipher for s in all_)
    assert comp and all(s.is_null_cipher for s in comp)
    assert set(all_) | set(comp) == set(catalog.suites)
    assert all_ == [s for s in catalog.suites if not s.is_null_cipher]


def test_complement_of_default(tiny) -> None:
    assert classify("COMPLEMENTOFDEFAULT", tiny) == [
        CipherSuite("rsa", "3des_ede_cbc", "sha"),
        CipherSuite("rsa", "rc4_128", "md5"),
        CipherSuite("dhe_rsa", "des_cbc", "sha"),
    ]


@pytest.mark.parametrize("kw,family", [("HIGH", HIGH), ("MEDIUM", MEDIUM), ("LOW", LOW)])
def test_strength_families(catalog, kw, family) -> None:
    got = classify(kw, catalog)
    assert got
    assert got == [s for s in catalog.suites if s.cipher in family]


def test_plus_is_intersection_in_catalog_order(catalog) -> None:
    got = classify("aRSA+kEDH+AES256", catalog)
    assert got == [
        CipherSuite("dhe_rsa", "aes_256_gcm", "aead", "sha384"),
        CipherSuite("dhe_rsa", "aes_256_cbc", "sha256"),
        CipherSuite("dhe_rsa", "aes_256_cbc", "sha"),
    ]
    # order of parts does not matter
    assert classify("AES256+kEDH+aRSA", catalog) == got


@pytest.mark.parametrize("alias", sorted(ALIASES))
def test_aliases_match_their_keyword(catalog, alias) -> None:
    assert classify(alias, catalog) == classify(ALIASES[alias], catalog)


@pytest.mark.parametrize("kw", sorted(UNSUPPORTED))
def test_unsupported_keywords_resolve_to_empty(catalog, kw) -> None:
    assert classify(kw, catalog) == []


def test_unsupported_part_empties_combination(catalog) -> None:
    assert classify("aRSA+CAMELLIA", catalog) == []


def test_sslv3_has_no_tls12_features(catalog) -> None:
    got = classify("SSLv3", catalog)
    assert got
    for s in got:
        assert s.mac in ("sha", "md5")
        assert s.prf == "default_prf"
        assert s.cipher not in ("aes_128_gcm", "aes_256_gcm", "chacha20_poly1305")


def test_tls12_is_a_disjunction(catalog) -> None:
    got = set(classify("TLSv1.2", catalog))
    # sha256 MAC with default PRF still counts
    assert CipherSuite("dhe_rsa", "aes_256_cbc", "sha256") in got
    assert CipherSuite("ecdhe_rsa", "chacha20_poly1305", "aead", "sha256") in got
    assert CipherSuite("rsa", "aes_128_cbc", "sha") not in got
    assert not got & set(classify("SSLv3", catalog))


def test_tls10_is_empty(catalog) -> None:
    assert classify("TLSv1.0", catalog) == []
    assert classify("TLSv1", catalog) == []


def test_chacha20(catalog) -> None:
    got = classify("CHACHA20", catalog)
    assert len(got) == 3
    assert all(s.cipher == "chacha20_poly1305" for s in got)


def test_empty_catalog_is_not_an_error(tiny) -> None:
    from cipher_core.catalog import SuiteCatalog

    empty = SuiteCatalog.from_tuples([])
    assert classify("ALL", empty) == []
    assert classify("HIGH+kRSA", empty) == []


def test_unknown_token_raises_by_default(catalog) -> None:
    with pytest.raises(UnrecognizedTokenError) as ei:
        classify("AES265", catalog)
    assert ei.value.token == "AES265"
    assert ei.value.part == "AES265"


def test_unknown_part_is_reported(catalog, strict) -> None:
    with pytest.raises(UnrecognizedTokenError) as ei:
        classify("aRSA+BOGUS+SHA", catalog, policy=strict)
    assert ei.value.part == "BOGUS"
    assert "BOGUS" in str(ei.value)


def test_empty_part_is_unknown(catalog) -> None:
    with pytest.raises(UnrecognizedTokenError):
        classify("AES++SHA", catalog)
    with pytest.raises(UnrecognizedTokenError):
        classify("", catalog)


def test_default_is_not_a_keyword(catalog) -> None:
    with pytest.raises(UnrecognizedTokenError):
        classify("DEFAULT", catalog)


def test_unknown_token_matches_nothing_when_lenient(catalog, lenient, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="selection.classifier"):
        assert classify("AES265", catalog, policy=lenient) == []
    assert "AES265" in caplog.text
