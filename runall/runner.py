from __future__ import annotations

import enum
import os
import shlex
import signal
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from runall.config import HarnessConfig
from runall.discovery import TestFile

# the toolchain and anything it spawns share one process group we can kill
NEW_SESSION = os.name == 'posix'


class Outcome(enum.Enum):
    SUCCESS = 'success'
    FAILURE = 'failure'
    NOT_FOUND = 'not-found'


@dataclass(frozen=True)
class InvocationResult:
    test_file: TestFile
    outcome: Outcome
    returncode: Optional[int]

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS


def build_cmdline(command: str, path) -> List[str]:
    return shlex.split(command) + [str(path)]


def kill_tree(p):
    if NEW_SESSION:
        try:
            os.killpg(p.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    else:
        p.kill()
    p.wait()


def run_passthrough(cmdline, timeout_sec=None): # errno
    # no pipes: the child writes straight to our stdout/stderr
    p = subprocess.Popen(cmdline, start_new_session=NEW_SESSION)
    try:
        errcode = p.wait(timeout=timeout_sec)
    except subprocess.TimeoutExpired:
        kill_tree(p) # cargo leaves the vm running as a grandchild otherwise
        errcode = -1
    except KeyboardInterrupt:
        # ^C goes to the terminal's process group, which the child left
        kill_tree(p)
        raise

    return errcode


def invoke(test_file: TestFile, config: HarnessConfig) -> InvocationResult:
    cmdline = build_cmdline(config.command, test_file.path)
    try:
        errno = run_passthrough(cmdline, config.timeout_sec)
    except FileNotFoundError as e:
        print('TOOLCHAIN NOT FOUND', cmdline[0], f'({e.strerror})', flush=True)
        return InvocationResult(test_file, Outcome.NOT_FOUND, None)
    except OSError as e:
        print('CANNOT START TOOLCHAIN', cmdline[0], f'({e.strerror})', flush=True)
        return InvocationResult(test_file, Outcome.NOT_FOUND, None)

    if errno:
        return InvocationResult(test_file, Outcome.FAILURE, errno)
    return InvocationResult(test_file, Outcome.SUCCESS, 0)
