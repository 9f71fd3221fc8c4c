"""File discovery: turn command-line paths into the ordered file list.

Directories named on the command line are read one level deep unless
unlimited recursion is requested. The result is ordered newest first,
assuming basenames in YYYYMMDD form.
"""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Iterable
from typing import TextIO

from .diagnostics import DEFAULT_PROGRAM_NAME, os_reason, warn


def sort_newest_first(paths: Iterable[str]) -> list[str]:
    """Sort by basename bytes, descending; equal basenames keep their order."""
    return sorted(paths, key=lambda p: os.fsencode(os.path.basename(p)), reverse=True)


class FileCollector:
    """Accumulates regular files found under a set of paths."""

    def __init__(
        self,
        recurse_more: bool = False,
        program_name: str = DEFAULT_PROGRAM_NAME,
        stream: TextIO | None = None,
    ) -> None:
        self.recurse_more = recurse_more
        self.program_name = program_name
        self.stream = stream if stream is not None else sys.stderr
        self.files: list[str] = []

    def _warn(self, message: str) -> None:
        warn(f"{self.program_name}: {message}", self.stream)

    def add(self, path: str, recurse: bool = True) -> bool:
        """Add ``path`` (or the files below it); ``False`` when it was skipped."""
        try:
            st = os.stat(path)
        except OSError as exc:
            self._warn(f"cannot stat '{path}': {os_reason(exc)}")
            return False

        if stat.S_ISDIR(st.st_mode):
            if not recurse:
                self._warn(f"-r not specified; omitting directory '{path}'")
                return False
            return self._add_directory(path)

        if not stat.S_ISREG(st.st_mode):
            self._warn(f"cannot read '{path}': not a regular file")
            return False

        self.files.append(path)
        return True

    def _add_directory(self, path: str) -> bool:
        try:
            names = os.listdir(path)
        except OSError as exc:
            self._warn(f"cannot opendir '{path}': {os_reason(exc)}")
            return False
        for name in names:
            self.add(os.path.join(path, name), recurse=self.recurse_more)
        return True


def collect_files(
    paths: Iterable[str],
    recurse_more: bool = False,
    program_name: str = DEFAULT_PROGRAM_NAME,
    stream: TextIO | None = None,
) -> list[str]:
    """Discover files under ``paths`` and return them newest first."""
    collector = FileCollector(recurse_more=recurse_more, program_name=program_name, stream=stream)
    for path in paths:
        collector.add(path)
    return sort_newest_first(collector.files)
