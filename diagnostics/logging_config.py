# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import logging
import os
import sys
from typing import Optional


def setup_logging(level: Optional[str] = None) -> None:
    name = (level or os.getenv("CIPHER_SUITES_LOG_LEVEL", "INFO")).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"unknown log level: {name!r}")
    logging.basicConfig(
        level=name,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
