# MIT License © 2025 Motohiro Suzuki
"""
fuzz/fuzz_selection.py

Fuzz harness for cipher-string evaluation (pure Python, no external fuzzer)

Each case builds random expressions from the keyword vocabulary and the
suite-name table, then checks the evaluator invariants:
- no duplicates in the result
- '!X' is permanent: nothing matched by X survives, whatever follows
- 'X:-X:X' == 'X'
- '+Y' never adds suites
- '@STRENGTH' is descending and idempotent
- 'DEFAULT...' == 'ALL:!COMPLEMENTOFDEFAULT:!eNULL...'

Run:
  python3 -m fuzz.fuzz_selection
  python3 -m fuzz.fuzz_selection --cases 200 --tokens 12 --seed 1
"""

from __future__ import annotations

import argparse
import random
from dataclasses import dataclass

from cipher_core.catalog import SuiteCatalog, builtin_catalog
from cipher_core.keywords import known_keywords, strength
from cipher_core.policy import SelectionPolicy
from selection.classifier import classify
from selection.evaluator import Selector

_MODIFIERS = ("", "", "", "!", "-", "+")


@dataclass
class FuzzParams:
    tokens: int
    combo_prob: float
    name_prob: float
    strength_prob: float


def random_cipher(rng: random.Random, catalog: SuiteCatalog, params: FuzzParams) -> str:
    if rng.random() < params.name_prob:
        return rng.choice(sorted(catalog.names))
    vocab = known_keywords()
    if rng.random() < params.combo_prob:
        return "+".join(rng.choice(vocab) for _ in range(rng.randint(2, 3)))
    return rng.choice(vocab)


def random_expression(rng: random.Random, catalog: SuiteCatalog, params: FuzzParams) -> list[str]:
    out = []
    for _ in range(rng.randint(1, params.tokens)):
        if rng.random() < params.strength_prob:
            out.append("@STRENGTH")
            continue
        out.append(rng.choice(_MODIFIERS) + random_cipher(rng, catalog, params))
    return out


def _join(rng: random.Random, tokens: list[str]) -> str:
    return "".join(t + rng.choice((":", ",", " ", " : ")) for t in tokens).rstrip(":, ")


def run_one_case(case_id: int, seed: int, params: FuzzParams, catalog: SuiteCatalog | None = None) -> None:
    rng = random.Random((seed << 32) ^ case_id)
    cat = catalog if catalog is not None else builtin_catalog()
    sel = Selector(cat, SelectionPolicy())

    tokens = random_expression(rng, cat, params)
    expr = _join(rng, tokens)
    result = sel.select(expr)

    if len(result) != len(set(result)):
        raise AssertionError(f"duplicates in result of {expr!r}")

    # exclusion is permanent
    for t in tokens:
        if t.startswith("!"):
            banned = set(classify(t[1:], cat))
            again = sel.select(expr + ":" + t[1:])
            if banned & set(again):
                raise AssertionError(f"excluded suites re-entered: {expr!r} + {t[1:]!r}")

    # promotion keeps membership
    y = random_cipher(rng, cat, params)
    promoted = sel.select(expr + ":+" + y)
    if set(promoted) != set(result):
        raise AssertionError(f"'+{y}' changed membership of {expr!r}")

    # @STRENGTH descending + idempotent
    once = sel.select(expr + ":@STRENGTH")
    twice = sel.select(expr + ":@STRENGTH:@STRENGTH")
    if once != twice:
        raise AssertionError(f"@STRENGTH not idempotent for {expr!r}")
    bits = [strength(s) for s in once]
    if bits != sorted(bits, reverse=True):
        raise AssertionError(f"@STRENGTH not descending for {expr!r}")

    # deletion is not permanent
    x = random_cipher(rng, cat, params)
    if sel.select(f"{x}:-{x}:{x}") != sel.select(x):
        raise AssertionError(f"'{x}:-{x}:{x}' differs from '{x}'")

    # DEFAULT rewrite
    rest = ":".join(tokens)
    if sel.select("DEFAULT:" + rest) != sel.select("ALL:!COMPLEMENTOFDEFAULT:!eNULL:" + rest):
        raise AssertionError(f"DEFAULT rewrite mismatch for rest={rest!r}")


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--cases", type=int, default=200, help="number of fuzz cases")
    ap.add_argument("--tokens", type=int, default=8, help="max tokens per expression")
    ap.add_argument("--seed", type=int, default=0, help="base seed")
    ap.add_argument("--combo-prob", type=float, default=0.35, help="chance a token is a '+' combination")
    ap.add_argument("--name-prob", type=float, default=0.15, help="chance a token is a suite name")
    ap.add_argument("--strength-prob", type=float, default=0.10, help="chance a token is @STRENGTH")
    args = ap.parse_args()

    if args.cases <= 0:
        raise SystemExit("--cases must be > 0")
    if args.tokens <= 0:
        raise SystemExit("--tokens must be > 0")
    for name in ("combo_prob", "name_prob", "strength_prob"):
        if not (0.0 <= getattr(args, name) <= 1.0):
            raise SystemExit(f"--{name.replace('_', '-')} must be in [0,1]")

    params = FuzzParams(
        tokens=args.tokens,
        combo_prob=args.combo_prob,
        name_prob=args.name_prob,
        strength_prob=args.strength_prob,
    )

    ok = 0
    for i in range(args.cases):
        run_one_case(i, seed=args.seed, params=params)
        ok += 1

    print("=== fuzz_selection OK ===")
    print(f"cases      : {ok}")
    print(f"tokens/case: <= {args.tokens}")
    print(f"seed       : {args.seed}")


if __name__ == "__main__":
    main()
