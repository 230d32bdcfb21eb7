"""Parse, check and rewrite SPDX license headers."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Optional

from lisensor.constants import COPYRIGHT_MARKER, LICENSE_MARKER, SENTINEL
from lisensor.errors import FixRefusedError
from lisensor.models import (
    CommentStyle,
    CopyrightNotice,
    FixResult,
    HeaderLine,
    HeaderLineKind,
    HeaderVerdict,
    Rule,
    YearRange,
)

logger = logging.getLogger(__name__)

_EOL_RE = re.compile(r"\r\n|\r|\n")
_YEARS_RE = re.compile(r"(\d{4})(?:-(\d{4}))?")
_NOTICE_KINDS = (HeaderLineKind.LICENSE, HeaderLineKind.COPYRIGHT)


def current_year() -> int:
    return datetime.now().year


def split_lines(text: str) -> list[tuple[str, str]]:
    """Split ``text`` into ``(content, terminator)`` pairs.

    Any of ``\\r\\n``, ``\\r`` and ``\\n`` ends a line. The last pair has an
    empty terminator when the text does not end with a line break, so
    joining the pairs back gives the original text.
    """
    lines: list[tuple[str, str]] = []
    position = 0
    for match in _EOL_RE.finditer(text):
        lines.append((text[position : match.start()], match.group()))
        position = match.end()
    if position < len(text):
        lines.append((text[position:], ""))
    return lines


def parse_line(line: str, style: CommentStyle) -> HeaderLine:
    if not line.startswith(style.prefix):
        return HeaderLine(kind=HeaderLineKind.OTHER, raw=line)
    content = line[len(style.prefix) :]
    if content.startswith(" "):
        content = content[1:]

    if content == SENTINEL:
        kind = HeaderLineKind.SENTINEL
    elif content.startswith(LICENSE_MARKER):
        kind = HeaderLineKind.LICENSE
    elif content.startswith(COPYRIGHT_MARKER):
        kind = HeaderLineKind.COPYRIGHT
    else:
        kind = HeaderLineKind.OTHER
    return HeaderLine(kind=kind, raw=line, content=content)


def parse_copyright(content: str) -> CopyrightNotice:
    """Parse ``Copyright (c) YYYY[-YYYY] HOLDER``.

    When the first token is not a valid year or year range, ``years`` is
    left unset and the whole remainder is taken as the holder.
    """
    rest = content[len(COPYRIGHT_MARKER) :] if content.startswith(COPYRIGHT_MARKER) else content
    token, _, holder = rest.partition(" ")
    match = _YEARS_RE.fullmatch(token)
    if match is None:
        return CopyrightNotice(years=None, holder=rest)
    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) else start
    if start > end:
        return CopyrightNotice(years=None, holder=holder)
    return CopyrightNotice(years=YearRange(start, end), holder=holder)


def _scan(
    lines: list[tuple[str, str]], style: CommentStyle
) -> tuple[list[HeaderLine], Optional[int]]:
    head: list[HeaderLine] = []
    for index, (content, _) in enumerate(lines):
        parsed = parse_line(content, style)
        if parsed.kind == HeaderLineKind.SENTINEL:
            return head, index
        head.append(parsed)
    return head, None


class HeaderEngine:
    def __init__(self, now_year: int | None = None) -> None:
        self.now_year = now_year if now_year is not None else current_year()

    def check(self, text: str, rule: Rule, style: CommentStyle) -> HeaderVerdict:
        head, sentinel_index = _scan(split_lines(text), style)

        found_license: Optional[str] = None
        if head and head[0].kind == HeaderLineKind.LICENSE:
            found_license = head[0].content[len(LICENSE_MARKER) :]

        notice: Optional[CopyrightNotice] = None
        if len(head) > 1 and head[1].kind == HeaderLineKind.COPYRIGHT:
            notice = parse_copyright(head[1].content)

        copyright_ok = (
            notice is not None
            and notice.well_formed
            and notice.years is not None
            and notice.years.end == self.now_year
        )
        holder_match: Optional[bool] = None
        if notice is not None and notice.holder:
            holder_match = notice.holder == rule.holder

        license_count = sum(1 for line in head if line.kind == HeaderLineKind.LICENSE)
        copyright_count = sum(1 for line in head if line.kind == HeaderLineKind.COPYRIGHT)

        return HeaderVerdict(
            license_ok=found_license == rule.license,
            copyright_ok=copyright_ok,
            holder_match=holder_match,
            duplicate_notice_found=license_count > 1 or copyright_count > 1,
            sentinel_index=sentinel_index,
            found_license=found_license,
            found_notice=notice,
            expected_license=rule.license,
            expected_holder=rule.holder,
            now_year=self.now_year,
        )

    def fix(self, text: str, rule: Rule, style: CommentStyle) -> FixResult:
        if self.check(text, rule, style).clean:
            return FixResult(text=text, changed=False)

        lines = split_lines(text)
        head, sentinel_index = _scan(lines, style)

        start_year: Optional[int] = None
        for line in head:
            if line.kind != HeaderLineKind.COPYRIGHT:
                continue
            notice = parse_copyright(line.content)
            # lines without a valid year and holder are replaced, never guarded
            holder = notice.holder.strip()
            if notice.years is None or not holder:
                continue
            if holder != rule.holder.strip():
                raise FixRefusedError(found_holder=holder, expected_holder=rule.holder)
            if start_year is None:
                start_year = notice.years.start
        if start_year is None or start_year > self.now_year:
            start_year = self.now_year
        years = YearRange(start_year, self.now_year)

        body = [line.raw for line in head if line.kind not in _NOTICE_KINDS]
        header = [
            f"{style.prefix} {LICENSE_MARKER}{rule.license}",
            f"{style.prefix} {COPYRIGHT_MARKER}{years} {rule.holder}",
        ]
        if body and body[0] != "":
            header.append("")

        output = "".join(f"{line}\n" for line in header + body)
        missing_final_newline = (
            sentinel_index is None
            and bool(head)
            and head[-1].kind not in _NOTICE_KINDS
            and lines[-1][1] == ""
        )
        if missing_final_newline:
            output = output[:-1]
        if sentinel_index is not None:
            output += "".join(content + ending for content, ending in lines[sentinel_index:])

        logger.debug("rewrote header for %s (%s)", rule.pattern, years)
        return FixResult(text=output, changed=output != text)
