"""Compile holder/glob/license triples into a queryable index."""

from __future__ import annotations

import logging
import os
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from lisensor.models import PatternConflict, PatternSource, Rule, RuleSet

logger = logging.getLogger(__name__)

_MAGIC_CHARS = frozenset("*?[")
_DRIVE_RE = re.compile(r"^[A-Za-z]:/")


def to_posix(value: str | Path) -> str:
    text = str(value)
    if os.sep != "/":
        text = text.replace(os.sep, "/")
    return text


def _is_absolute(text: str) -> bool:
    return text.startswith("/") or bool(_DRIVE_RE.match(text))


def normalize_pattern(pattern: str, base_dir: str | Path) -> str:
    """Make ``pattern`` absolute against ``base_dir`` with forward slashes."""
    text = to_posix(pattern)
    if not _is_absolute(text):
        text = posixpath.join(to_posix(base_dir), text)
    return posixpath.normpath(text)


def normalize_path(path: str | Path, root: str) -> str:
    text = to_posix(path)
    if not _is_absolute(text):
        text = posixpath.join(root, text)
    return posixpath.normpath(text)


def has_magic(segment: str) -> bool:
    return any(char in _MAGIC_CHARS for char in segment)


def _translate_class(segment: str, start: int) -> tuple[str, int] | None:
    end = start + 1
    negated = end < len(segment) and segment[end] in "!^"
    if negated:
        end += 1
    first = end
    # a leading "]" is a member of the class, not its end
    if end < len(segment) and segment[end] == "]":
        end += 1
    while end < len(segment) and segment[end] != "]":
        end += 1
    if end >= len(segment):
        return None
    body = "".join(
        f"\\{char}" if char in "\\[]" else char for char in segment[first:end]
    )
    if negated:
        return f"[^/{body}]", end + 1
    return f"[{body}]", end + 1


def _translate_segment(segment: str) -> str:
    parts: list[str] = []
    index = 0
    while index < len(segment):
        char = segment[index]
        if char == "*":
            while index < len(segment) and segment[index] == "*":
                index += 1
            parts.append("[^/]*")
            continue
        if char == "?":
            parts.append("[^/]")
        elif char == "[":
            translated = _translate_class(segment, index)
            if translated is not None:
                parts.append(translated[0])
                index = translated[1]
                continue
            parts.append(re.escape(char))
        else:
            parts.append(re.escape(char))
        index += 1
    return "".join(parts)


def translate(pattern: str) -> str:
    """Translate a normalized glob into an anchored regular expression."""
    segments = pattern.split("/")
    last = len(segments) - 1
    parts: list[str] = []
    for index, segment in enumerate(segments):
        if segment == "**":
            parts.append(".+" if index == last else "(?:[^/]+/)*")
            continue
        parts.append(_translate_segment(segment))
        if index != last:
            parts.append("/")
    return "^" + "".join(parts) + "$"


@dataclass(frozen=True)
class GlobPattern:
    text: str
    regex: re.Pattern[str]
    base: str
    literal: bool

    @classmethod
    def compile(cls, text: str) -> "GlobPattern":
        segments = text.split("/")
        magic_at = next(
            (index for index, segment in enumerate(segments) if has_magic(segment)),
            None,
        )
        if magic_at is None:
            base = posixpath.dirname(text) or "/"
            literal = True
        else:
            base = "/".join(segments[:magic_at]) or "/"
            literal = False
        return cls(text=text, regex=re.compile(translate(text)), base=base, literal=literal)

    def matches(self, normalized_path: str) -> bool:
        return self.regex.match(normalized_path) is not None


class GlobIndex:
    def __init__(
        self,
        rules: RuleSet,
        patterns: dict[str, GlobPattern],
        root: str,
    ) -> None:
        self._rules = rules
        self._patterns = patterns
        self._root = root
        self._rules_by_pattern: dict[str, list[Rule]] = {}
        for rule in rules:
            self._rules_by_pattern.setdefault(rule.pattern, []).append(rule)

    @classmethod
    def build(
        cls, sources: Iterable[PatternSource], root: Path | None = None
    ) -> tuple["GlobIndex", list[PatternConflict]]:
        root_text = posixpath.normpath(to_posix(root or Path.cwd()))
        rules: list[Rule] = []
        by_pattern: dict[str, list[Rule]] = {}
        conflicts: list[PatternConflict] = []

        for order, source in enumerate(sources):
            pattern = normalize_pattern(source.pattern, source.base_dir)
            rule = Rule(
                holder=source.holder,
                license=source.license,
                pattern=pattern,
                origin=source.origin,
                order=order,
            )
            existing = by_pattern.setdefault(pattern, [])
            if any(item.key == rule.key for item in existing):
                logger.warning(
                    "glob '%s' specified multiple times (in %s)", pattern, source.origin
                )
                continue
            for other in existing:
                conflicts.append(PatternConflict(pattern=pattern, rule_a=other, rule_b=rule))
            existing.append(rule)
            rules.append(rule)

        patterns = {pattern: GlobPattern.compile(pattern) for pattern in by_pattern}
        logger.debug("indexed %d rule(s) over %d glob(s)", len(rules), len(patterns))
        return cls(tuple(rules), patterns, root_text), conflicts

    @property
    def rules(self) -> RuleSet:
        return self._rules

    @property
    def root(self) -> str:
        return self._root

    @property
    def patterns(self) -> list[GlobPattern]:
        return [self._patterns[key] for key in sorted(self._patterns)]

    def normalize(self, path: str | Path) -> str:
        return normalize_path(path, self._root)

    def match(self, path: str | Path) -> list[Rule]:
        normalized = self.normalize(path)
        matched: list[Rule] = []
        for text, pattern in self._patterns.items():
            if pattern.matches(normalized):
                matched.extend(self._rules_by_pattern[text])
        return sorted(matched, key=lambda rule: rule.order)
