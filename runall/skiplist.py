"""Skip-list parsing and matching.

Usage: ``runall -s add.v sub.v [-s mul.v ...]``

Tokens after ``-s`` are collected until the next flag-shaped token (anything
starting with ``-``). That token is then scanned normally, so ``-s`` may
repeat and unknown flags are ignored. Nothing here ever raises.
"""

from __future__ import annotations

import enum
from typing import FrozenSet, Iterable

from runall.discovery import TestFile

SKIP_FLAG = '-s'
FLAG_MARKER = '-'


class ScanState(enum.Enum):
    SCANNING = enum.auto()
    COLLECTING = enum.auto()


def is_flag(token: str) -> bool:
    return token.startswith(FLAG_MARKER)


def parse_skip_args(tokens: Iterable[str]) -> FrozenSet[str]:
    skip = set()
    state = ScanState.SCANNING
    for tok in tokens:
        if state is ScanState.COLLECTING:
            if not is_flag(tok):
                skip.add(tok)
                continue
            state = ScanState.SCANNING
        # SCANNING; a flag that ended a run lands here too
        if tok == SKIP_FLAG:
            state = ScanState.COLLECTING
    return frozenset(skip)


def is_skipped(test_file: TestFile, skip: FrozenSet[str]) -> bool:
    return test_file.name in skip
