# MIT License © 2025 Motohiro Suzuki
"""
selection/evaluator.py

OpenSSL cipher-string evaluation: tokens folded over a SelectionState

Modifiers (leading character of a token):
- (none)  append   : add matching suites not yet present, in catalog order
- '!'     exclude  : remove now AND forever (never re-added later)
- '-'     delete   : remove now; later tokens may add them back
- '+'     promote  : move matching suites already present to the END
- '@STRENGTH'      : stable sort by effective key size, strongest first

"DEFAULT" as the FIRST token is rewritten into ALL:!COMPLEMENTOFDEFAULT:!eNULL.

Result = included - excluded. Evaluation either consumes every token or
raises on the first unrecognized one; there are no partial results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Set

from cipher_core.catalog import SuiteCatalog
from cipher_core.errors import UnrecognizedTokenError
from cipher_core.keywords import strength
from cipher_core.policy import SelectionPolicy
from cipher_core.suite import CipherSuite
from selection.classifier import classify
from selection.tokenizer import tokenize

logger = logging.getLogger(__name__)

DEFAULT_EXPANSION = ("ALL", "!COMPLEMENTOFDEFAULT", "!eNULL")
STRENGTH_DIRECTIVE = "@STRENGTH"
SECLEVEL_PREFIX = "@SECLEVEL="


@dataclass
class SelectionState:
    included: List[CipherSuite] = field(default_factory=list)
    excluded: Set[CipherSuite] = field(default_factory=set)

    def append(self, suites: Iterable[CipherSuite]) -> None:
        present = set(self.included)
        for s in suites:
            if s in present or s in self.excluded:
                continue
            present.add(s)
            self.included.append(s)

    def exclude(self, suites: Iterable[CipherSuite]) -> None:
        self.excluded.update(suites)
        self.included = [s for s in self.included if s not in self.excluded]

    def delete(self, suites: Iterable[CipherSuite]) -> None:
        gone = set(suites)
        self.included = [s for s in self.included if s not in gone]

    def promote(self, suites: Iterable[CipherSuite]) -> None:
        matched = set(suites)
        rest = [s for s in self.included if s not in matched]
        moved = [s for s in self.included if s in matched]
        self.included = rest + moved

    def sort_by_strength(self) -> None:
        # sorted() stays stable with reverse=True
        self.included = sorted(self.included, key=strength, reverse=True)

    def result(self) -> List[CipherSuite]:
        return [s for s in self.included if s not in self.excluded]


def expand_default(tokens: Iterable[str]) -> Iterator[str]:
    it = iter(tokens)
    first = next(it, None)
    if first is None:
        return
    if first == "DEFAULT":
        yield from DEFAULT_EXPANSION
    else:
        yield first
    yield from it


class Selector:
    def __init__(self, catalog: Optional[SuiteCatalog] = None, policy: Optional[SelectionPolicy] = None) -> None:
        self.policy = policy if policy is not None else SelectionPolicy.from_env()
        self.catalog = catalog if catalog is not None else self.policy.load_catalog()

    def _classify(self, token: str) -> List[CipherSuite]:
        return classify(token, self.catalog, policy=self.policy)

    def _directive(self, state: SelectionState, token: str) -> None:
        if token == STRENGTH_DIRECTIVE:
            state.sort_by_strength()
            return
        if token.startswith(SECLEVEL_PREFIX):
            logger.warning("%s is not supported by the suite catalog; ignored", token)
            return
        if self.policy.strict:
            raise UnrecognizedTokenError(token)
        logger.warning("unknown directive %r ignored", token)

    def apply(self, state: SelectionState, token: str) -> SelectionState:
        head = token[:1]
        if head == "@":
            self._directive(state, token)
        elif head == "!":
            state.exclude(self._classify(token[1:]))
        elif head == "-":
            state.delete(self._classify(token[1:]))
        elif head == "+":
            state.promote(self._classify(token[1:]))
        else:
            state.append(self._classify(token))

        logger.debug("%-28s included=%d excluded=%d", token, len(state.included), len(state.excluded))
        return state

    def run(self, tokens: Iterable[str]) -> SelectionState:
        state = SelectionState()
        for token in expand_default(tokens):
            self.apply(state, token)
        return state

    def select(self, expression: str) -> List[CipherSuite]:
        return self.run(tokenize(expression)).result()

    def select_names(self, expression: str) -> List[str]:
        out: List[str] = []
        for s in self.select(expression):
            name = self.catalog.name_of(s)
            if name is None:
                logger.debug("suite %s has no OpenSSL name; omitted", s)
                continue
            out.append(name)
        return out


def select(
    expression: str,
    catalog: Optional[SuiteCatalog] = None,
    *,
    policy: Optional[SelectionPolicy] = None,
) -> List[CipherSuite]:
    """
    Apply an OpenSSL cipher selection string, e.g. "aRSA+kEECDH+AES256:!SHA",
    and return the resulting suites in preference order.
    """
    return Selector(catalog, policy).select(expression)


def select_names(
    expression: str,
    catalog: Optional[SuiteCatalog] = None,
    *,
    policy: Optional[SelectionPolicy] = None,
) -> List[str]:
    """OpenSSL names of select(); ":".join() them for ssl.SSLContext.set_ciphers()."""
    return Selector(catalog, policy).select_names(expression)


def all_suites(catalog: Optional[SuiteCatalog] = None) -> List[CipherSuite]:
    # includes null ciphers, unlike select("ALL")
    cat = catalog if catalog is not None else SelectionPolicy.from_env().load_catalog()
    return list(cat.suites)


def default_suites(catalog: Optional[SuiteCatalog] = None) -> List[CipherSuite]:
    cat = catalog if catalog is not None else SelectionPolicy.from_env().load_catalog()
    return list(cat.defaults)
