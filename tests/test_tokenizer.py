# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import pytest

from selection.tokenizer import tokenize


def test_splits_on_all_separators() -> None:
    assert list(tokenize("a:b,c d\te\nf")) == ["a", "b", "c", "d", "e", "f"]


def test_no_empty_tokens() -> None:
    assert list(tokenize("::a,, :b  ,:")) == ["a", "b"]


def test_empty_and_blank_expressions() -> None:
    assert list(tokenize("")) == []
    assert list(tokenize(" :,\t")) == []


def test_modifiers_and_plus_stay_inside_token() -> None:
    assert list(tokenize("!aNULL:-SSLv3:+AES128:aRSA+kEDH:@STRENGTH")) == [
        "!aNULL", "-SSLv3", "+AES128", "aRSA+kEDH", "@STRENGTH",
    ]


def test_is_lazy() -> None:
    it = tokenize("A:B")
    assert next(it) == "A"
    assert next(it) == "B"
    with pytest.raises(StopIteration):
        next(it)


def test_rejects_non_str() -> None:
    with pytest.raises(TypeError):
        list(tokenize(b"ALL"))  # type: ignore[arg-type]
