"""Enumerate candidate files for the configured glob patterns."""

import logging
import os
import posixpath
from dataclasses import dataclass, field
from pathlib import Path

from lisensor.glob_index import GlobIndex, GlobPattern, to_posix
from lisensor.utils import is_regular_file

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    files: list[Path] = field(default_factory=list)
    unmatched_patterns: list[str] = field(default_factory=list)


class FileDiscovery:
    def __init__(self, index: GlobIndex) -> None:
        self.index = index

    def discover(self) -> DiscoveryResult:
        found: set[str] = set()
        unmatched: list[str] = []
        for pattern in self.index.patterns:
            matched = self._files_for(pattern)
            if not matched:
                logger.warning("glob '%s' did not match any file", pattern.text)
                unmatched.append(pattern.text)
            found.update(matched)
        logger.info("discovered %d file(s)", len(found))
        return DiscoveryResult(
            files=[Path(item) for item in sorted(found)],
            unmatched_patterns=unmatched,
        )

    def _files_for(self, pattern: GlobPattern) -> list[str]:
        if pattern.literal:
            return [pattern.text] if is_regular_file(Path(pattern.text)) else []

        base = Path(pattern.base)
        if not base.is_dir():
            return []

        matched: list[str] = []
        # symlinked directories are listed but never descended into
        for dirpath, dirnames, filenames in os.walk(base, followlinks=False):
            dirnames.sort()
            directory = to_posix(dirpath)
            for name in sorted(filenames):
                candidate = posixpath.join(directory, name)
                if not pattern.matches(self.index.normalize(candidate)):
                    continue
                if is_regular_file(Path(candidate)):
                    matched.append(candidate)
        return matched
