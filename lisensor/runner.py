import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Optional

from lisensor.comment_styles import style_for
from lisensor.errors import FixRefusedError
from lisensor.glob_index import GlobIndex
from lisensor.header import HeaderEngine
from lisensor.models import (
    CommentStyle,
    ConflictingCoverage,
    FileReport,
    FileStatus,
    Rule,
    RunReport,
    Unmatched,
)
from lisensor.ownership import OwnershipResolver
from lisensor.utils import read_source, write_source

logger = logging.getLogger(__name__)


class LicenseRunner:
    def __init__(
        self,
        index: GlobIndex,
        engine: Optional[HeaderEngine] = None,
        fix: bool = False,
        jobs: Optional[int] = None,
        fail_on_unmatched: bool = False,
    ) -> None:
        self.resolver = OwnershipResolver(index)
        self.engine = engine or HeaderEngine()
        self.fix = fix
        self.jobs = jobs
        self.fail_on_unmatched = fail_on_unmatched

    def run(self, paths: Iterable[Path]) -> RunReport:
        skipped: list[Path] = []
        candidates: list[tuple[Path, CommentStyle]] = []
        for path in paths:
            style = style_for(path)
            if style is None:
                logger.debug("skipping unsupported file %s", path)
                skipped.append(path)
                continue
            candidates.append((path, style))

        with ThreadPoolExecutor(max_workers=self.jobs) as pool:
            reports = list(pool.map(self._process_safely, candidates))

        reports.sort(key=lambda report: str(report.path))
        return RunReport(
            files=reports,
            skipped=sorted(skipped),
            fix=self.fix,
            fail_on_unmatched=self.fail_on_unmatched,
        )

    def _process_safely(self, candidate: tuple[Path, CommentStyle]) -> FileReport:
        path, style = candidate
        try:
            return self.process(path, style)
        except Exception as exc:
            logger.error("failed to process '%s': %s", path, exc)
            return FileReport(path=path, status=FileStatus.ERROR, messages=(str(exc),))

    def process(self, path: Path, style: CommentStyle) -> FileReport:
        ownership = self.resolver.resolve(path)
        if isinstance(ownership, Unmatched):
            logger.info("'%s' is not matched by any glob", path)
            return FileReport(
                path=path,
                status=FileStatus.UNMATCHED,
                messages=("not matched by any glob.",),
            )

        rule = ownership.rule
        if not self.fix:
            return self._check(path, style, rule)

        report = self._fix(path, style, rule)
        if isinstance(ownership, ConflictingCoverage):
            message = (
                "file matched by multiple globs of conflicting config: "
                f"{ownership.describe()}"
            )
            logger.error("'%s': %s", path, message)
            return FileReport(
                path=path,
                status=FileStatus.CONFLICTING_COVERAGE,
                messages=(message, *report.messages),
                rule=rule,
            )
        return report

    def _check(self, path: Path, style: CommentStyle, rule: Rule) -> FileReport:
        verdict = self.engine.check(read_source(path), rule, style)
        if verdict.clean:
            return FileReport(path=path, status=FileStatus.CLEAN, rule=rule)

        messages = tuple(verdict.messages())
        logger.warning("'%s': %s", path, " ".join(messages))
        return FileReport(
            path=path,
            status=FileStatus.VIOLATIONS,
            violations=tuple(verdict.violations),
            messages=messages,
            rule=rule,
        )

    def _fix(self, path: Path, style: CommentStyle, rule: Rule) -> FileReport:
        text = read_source(path)
        verdict = self.engine.check(text, rule, style)
        if verdict.clean:
            return FileReport(path=path, status=FileStatus.CLEAN, rule=rule)

        try:
            result = self.engine.fix(text, rule, style)
        except FixRefusedError as exc:
            logger.error("failed to fix '%s': %s", path, exc)
            return FileReport(
                path=path,
                status=FileStatus.FIX_REFUSED,
                violations=tuple(verdict.violations),
                messages=(str(exc),),
                rule=rule,
            )

        if result.changed:
            logger.debug("fixing '%s'", path)
            write_source(path, result.text)

        recheck = self.engine.check(result.text, rule, style)
        if not recheck.clean:
            return FileReport(
                path=path,
                status=FileStatus.VIOLATIONS,
                violations=tuple(recheck.violations),
                messages=tuple(recheck.messages()),
                rule=rule,
            )
        return FileReport(
            path=path,
            status=FileStatus.FIXED,
            violations=tuple(verdict.violations),
            messages=tuple(verdict.messages()),
            rule=rule,
        )
