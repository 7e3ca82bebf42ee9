# MIT License © 2025 Motohiro Suzuki
"""
diagnostics/bench_runner.py

Selection benchmark runner (ALWAYS prints results)

What it measures:
- tokenize() throughput on a long expression
- select() throughput for typical server/client cipher strings

Run:
  python3 -m diagnostics.bench_runner
  python3 -m diagnostics.bench_runner 2>&1 | tee bench_select.txt
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from cipher_core.catalog import builtin_catalog
from cipher_core.policy import SelectionPolicy
from selection.evaluator import Selector
from selection.tokenizer import tokenize

EXPRESSIONS = (
    "DEFAULT",
    "ALL:COMPLEMENTOFALL",
    "aRSA+kEECDH+AES256:!SHA",
    "!MEDIUM:!LOW:kRSA+SHA",
    "aRSA+kEECDH+SHA256:aRSA+kEDH+SHA256:+AES128",
    "DES:3DES:AES128:AES256:CHACHA20:@STRENGTH",
    "HIGH:!aNULL:!eNULL:!PSK:!SRP:-SSLv3:+AES128:@STRENGTH",
)


@dataclass(frozen=True)
class BenchResult:
    name: str
    ops: int
    seconds: float

    @property
    def ops_per_sec(self) -> float:
        return self.ops / self.seconds if self.seconds > 0 else 0.0

    @property
    def us_per_op(self) -> float:
        return (self.seconds * 1e6) / self.ops if self.ops > 0 else 0.0


def _now() -> float:
    return time.perf_counter()


def _bench_loop(name: str, ops: int, fn: Callable[[], None]) -> BenchResult:
    t0 = _now()
    for _ in range(ops):
        fn()
    t1 = _now()
    return BenchResult(name=name, ops=ops, seconds=(t1 - t0))


def bench_tokenize(ops: int = 20_000) -> BenchResult:
    expr = ":".join(EXPRESSIONS) + " , " + " ".join(EXPRESSIONS)

    def _tok() -> None:
        for _ in tokenize(expr):
            pass

    return _bench_loop("tokenize(long)", ops=ops, fn=_tok)


def bench_select(ops: int = 500) -> list[BenchResult]:
    selector = Selector(builtin_catalog(), SelectionPolicy())
    out = []
    for expr in EXPRESSIONS:
        out.append(_bench_loop(f"select({expr})", ops=ops, fn=lambda e=expr: selector.select(e)))
    return out


def main() -> None:
    print("=== cipher selection bench ===")
    print("")

    try:
        tok = bench_tokenize()
        print("[TOKENIZE]")
        print(f"  {tok.name}: ops={tok.ops} time={tok.seconds:.4f}s ops/s={tok.ops_per_sec:,.0f}")
    except Exception as e:
        print(f"[TOKENIZE] bench failed: {e!r}")

    print("")

    try:
        print(f"[SELECT] catalog={len(builtin_catalog())} suites")
        for r in bench_select():
            print(f"  {r.name}: ops={r.ops} time={r.seconds:.4f}s us/op={r.us_per_op:,.1f}")
    except Exception as e:
        print(f"[SELECT] bench failed: {e!r}")

    print("")
    print("=== DONE ===")


if __name__ == "__main__":
    main()
