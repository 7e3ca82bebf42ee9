# MIT License © 2025 Motohiro Suzuki
"""
selection/classifier.py

classify(token) -> suites the token denotes, in catalog order

Resolution order:
1) exact OpenSSL suite name (host lookup)  -> [suite]
2) '+'-separated keywords                  -> suites matching EVERY part
"""

from __future__ import annotations

import logging
from typing import List, Optional

from cipher_core.catalog import SuiteCatalog
from cipher_core.errors import UnrecognizedTokenError
from cipher_core.keywords import Predicate, keyword_predicate
from cipher_core.policy import SelectionPolicy
from cipher_core.suite import CipherSuite

logger = logging.getLogger(__name__)


def _predicates(token: str) -> tuple[list[Predicate], Optional[str]]:
    preds: list[Predicate] = []
    for part in token.split("+"):
        pred = keyword_predicate(part)
        if pred is None:
            return [], part
        preds.append(pred)
    return preds, None


def classify(token: str, catalog: SuiteCatalog, *, policy: Optional[SelectionPolicy] = None) -> List[CipherSuite]:
    suite = catalog.lookup(token)
    if suite is not None:
        return [suite]

    preds, unknown = _predicates(token)
    if unknown is not None:
        if policy is None or policy.strict:
            raise UnrecognizedTokenError(token, unknown)
        logger.warning("unrecognized cipher string %r (part %r) matches nothing", token, unknown)
        return []

    return [s for s in catalog.suites if all(p(s, catalog) for p in preds)]
