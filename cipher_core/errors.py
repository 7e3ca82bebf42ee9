# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

from typing import Optional


class SelectionError(ValueError):
    pass


class UnrecognizedTokenError(SelectionError):
    """
    A token is neither a known suite name nor a '+'-combination of keywords.
    `part` is the offending '+'-separated piece (equal to `token` when the
    token has no '+').
    """

    def __init__(self, token: str, part: Optional[str] = None) -> None:
        self.token = token
        self.part = token if part is None else part
        if self.part == token:
            msg = f"unrecognized cipher string: {token!r}"
        else:
            msg = f"unrecognized cipher string: {token!r} (unknown part {self.part!r})"
        super().__init__(msg)


class PolicyError(SelectionError):
    pass


class CatalogError(RuntimeError):
    pass
