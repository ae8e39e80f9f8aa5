# src/rideem/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ThirdPartyFilter(logging.Filter):
    """Console gate: rideem records pass, other loggers only at `min_level`+."""

    def __init__(self, min_level: int = logging.ERROR) -> None:
        super().__init__()
        self.min_level = min_level

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "rideem" or record.name.startswith("rideem."):
            return True
        return record.levelno >= self.min_level


def setup_logging(
    *,
    log_dir: str | Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    third_party_level: int = logging.ERROR,
) -> None:
    """
    Configure the root logger for the rideem CLI.

    The console shows rideem logs at `console_level` and httpx/httpcore
    (or anything else) only from `third_party_level`. With `log_dir`, an
    unfiltered rideem.log is written there as well. Library code never
    calls this.
    """
    root = logging.getLogger()
    root.setLevel(min(console_level, file_level) if log_dir is not None else console_level)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ThirdPartyFilter(third_party_level))
    root.addHandler(console)

    if log_dir is not None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path / "rideem.log"), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)
