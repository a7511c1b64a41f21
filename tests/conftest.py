import shlex
import sys

import pytest

# Stand-in toolchain: prints the base name it was handed and exits non-zero
# for any file whose name contains "fail".
ECHO_TOOL = (
    "import os, sys\n"
    "name = os.path.basename(sys.argv[1])\n"
    "print('ran', name)\n"
    "sys.exit(3 if 'fail' in name else 0)\n"
)


def py_command(code):
    return f"{shlex.quote(sys.executable)} -c {shlex.quote(code)}"


@pytest.fixture
def make_tests(tmp_path):
    def _make(*names):
        d = tmp_path / "marz"
        d.mkdir(exist_ok=True)
        for n in names:
            (d / n).write_bytes(b"\xde\xad\xbe\xef")
        return d
    return _make


@pytest.fixture
def harness_env(monkeypatch, make_tests):
    """Point the harness at a temp test dir and the stand-in toolchain."""
    def _setup(*names, **env):
        d = make_tests(*names)
        monkeypatch.setenv("RUNALL_TEST_DIR", str(d))
        monkeypatch.setenv("RUNALL_COMMAND", py_command(ECHO_TOOL))
        for var in ("RUNALL_EXT", "RUNALL_TIMEOUT", "RUNALL_FAILFAST", "RUNALL_PROGRESS"):
            monkeypatch.delenv(var, raising=False)
        for k, v in env.items():
            monkeypatch.setenv(k, v)
        return d
    return _setup
