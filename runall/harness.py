"""Runs every test program in the test directory through the toolchain.

    runall [-s name.v ...]

Files run one at a time in name order, and the toolchain's output goes
straight to the console. A failing file does not stop the run unless
RUNALL_FAILFAST is set. The exit status is 1 when any file failed.
"""

from __future__ import annotations

import sys
from typing import FrozenSet, List, Optional, Sequence

from tqdm import tqdm

from runall.config import ConfigError, HarnessConfig, load_config
from runall.discovery import TestFile, discover
from runall.runner import InvocationResult, Outcome, invoke
from runall.skiplist import is_skipped, parse_skip_args

RULE = '-' * 36


def banner(test_file: TestFile) -> str:
    return f'{RULE}\n🟢  Running: {test_file.path}\n{RULE}'


def completion_message(extension: str) -> str:
    return f'Finished running all {extension} tests.'


def run_all(config: HarnessConfig, skip: FrozenSet[str]) -> List[InvocationResult]:
    results = []
    files = discover(config.test_dir, config.extension)

    for f in tqdm(files, disable=not config.progress):
        if is_skipped(f, skip):
            continue

        print(banner(f), flush=True)
        res = invoke(f, config)
        print(flush=True)
        results.append(res)

        if config.fail_fast and not res.ok:
            print('STOPPING AFTER', f.path, flush=True)
            break

    return results


def summarize(results: Sequence[InvocationResult]) -> List[str]:
    if not results:
        return []

    passed = sum(1 for r in results if r.outcome is Outcome.SUCCESS)
    failed = sum(1 for r in results if r.outcome is Outcome.FAILURE)
    missing = sum(1 for r in results if r.outcome is Outcome.NOT_FOUND)

    lines = [f'Ran {len(results)} files: {passed} passed, {failed} failed, {missing} not found']
    for r in results:
        if r.outcome is Outcome.FAILURE:
            lines.append(f'FAIL: {r.test_file.path} (exit code {r.returncode})')
        elif r.outcome is Outcome.NOT_FOUND:
            lines.append(f'NOT FOUND: {r.test_file.path}')
    return lines


def exit_status(results: Sequence[InvocationResult]) -> int:
    return 0 if all(r.ok for r in results) else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        config = load_config()
    except ConfigError as e:
        print(f'runall: {e}', file=sys.stderr)
        return 2

    skip = parse_skip_args(argv)
    results = run_all(config, skip)

    for line in summarize(results):
        print(line)
    print(completion_message(config.extension))

    return exit_status(results)


def cli():
    sys.exit(main())


if __name__ == '__main__':
    cli()
