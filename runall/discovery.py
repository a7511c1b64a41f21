from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class TestFile:
    path: pathlib.Path

    # keep pytest from collecting this as a test class
    __test__ = False

    @property
    def name(self) -> str:
        return self.path.name


def discover(test_dir, extension: str) -> List[TestFile]:
    """Regular files in ``test_dir`` ending in ``extension``, sorted by name.

    A missing directory yields an empty list. Dotfiles are left out, as a
    shell ``*.v`` glob would.
    """
    test_dir = pathlib.Path(test_dir)
    if not test_dir.is_dir():
        return []
    paths = [
        p for p in test_dir.glob('*' + extension)
        if p.is_file() and not p.name.startswith('.')
    ]
    return [TestFile(p) for p in sorted(paths, key=lambda p: p.name)]
