"""Process-wide settings, read once at startup.

Every setting has a default below and an environment override:

    RUNALL_TEST_DIR   directory holding the test programs   (../marz)
    RUNALL_EXT        extension filter                      (.v)
    RUNALL_COMMAND    toolchain command; the file is appended (cargo run --quiet)
    RUNALL_TIMEOUT    per-file limit in seconds              (none)
    RUNALL_FAILFAST   stop at the first failing file         (off)
    RUNALL_PROGRESS   show a tqdm progress bar on stderr     (off)
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_TEST_DIR = '../marz'
DEFAULT_EXTENSION = '.v'
DEFAULT_COMMAND = 'cargo run --quiet'

FAILFAST = False
PROGRESS = False

_TRUTHY = {'1', 'true', 'yes', 'on'}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class HarnessConfig:
    test_dir: Path = Path(DEFAULT_TEST_DIR)
    extension: str = DEFAULT_EXTENSION
    command: str = DEFAULT_COMMAND
    timeout_sec: Optional[float] = None
    fail_fast: bool = FAILFAST
    progress: bool = PROGRESS


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _timeout(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    try:
        sec = float(value)
    except ValueError:
        raise ConfigError(f'RUNALL_TIMEOUT must be a number of seconds, got {value!r}') from None
    if sec <= 0:
        raise ConfigError(f'RUNALL_TIMEOUT must be positive, got {value!r}')
    return sec


def normalize_extension(ext: str) -> str:
    ext = ext.strip()
    if ext and not ext.startswith('.'):
        ext = '.' + ext
    return ext


def load_config(environ: Optional[Mapping[str, str]] = None) -> HarnessConfig:
    env = os.environ if environ is None else environ

    command = env.get('RUNALL_COMMAND', DEFAULT_COMMAND)
    try:
        argv = shlex.split(command)
    except ValueError as e:
        raise ConfigError(f'RUNALL_COMMAND cannot be parsed: {e}') from None
    if not argv:
        raise ConfigError('RUNALL_COMMAND is empty')

    extension = normalize_extension(env.get('RUNALL_EXT', DEFAULT_EXTENSION))
    if not extension:
        raise ConfigError('RUNALL_EXT is empty')

    return HarnessConfig(
        test_dir=Path(env.get('RUNALL_TEST_DIR', DEFAULT_TEST_DIR)),
        extension=extension,
        command=command,
        timeout_sec=_timeout(env.get('RUNALL_TIMEOUT')),
        fail_fast=_flag(env.get('RUNALL_FAILFAST'), FAILFAST),
        progress=_flag(env.get('RUNALL_PROGRESS'), PROGRESS),
    )
