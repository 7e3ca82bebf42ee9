# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import re
from typing import Iterator

# separators: ':' ',' and whitespace; no escaping
_TOKEN_RE = re.compile(r"[^:,\s]+")


def tokenize(expression: str) -> Iterator[str]:
    if not isinstance(expression, str):
        raise TypeError(f"expression must be str, got {type(expression).__name__}")
    for m in _TOKEN_RE.finditer(expression):
        yield m.group(0)
