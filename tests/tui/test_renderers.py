"""Tests for the rich report renderer."""

from pathlib import Path

from rich.console import Console

from lisensor.models import FileReport, FileStatus, PatternConflict, RunReport
from lisensor.tui import LicenseConsoleUI


def _ui() -> tuple[LicenseConsoleUI, Console]:
    console = Console(record=True, width=120, color_system=None)
    return LicenseConsoleUI(console), console


def _report(*reports: FileReport, fix: bool = False) -> RunReport:
    return RunReport(files=list(reports), fix=fix)


def test_clean_report_hides_clean_files() -> None:
    ui, console = _ui()

    ui.render_report(_report(FileReport(path=Path("/tmp/a.rs"), status=FileStatus.CLEAN)))

    text = console.export_text()
    assert "license overview" in text
    assert "license check successful for 1 files." in text
    assert "a.rs" not in text


def test_verbose_report_lists_every_file() -> None:
    ui, console = _ui()

    ui.render_report(
        _report(FileReport(path=Path("/tmp/a.rs"), status=FileStatus.CLEAN)),
        verbose=True,
    )

    assert "a.rs" in console.export_text()


def test_failed_check_suggests_fix() -> None:
    ui, console = _ui()
    report = _report(
        FileReport(
            path=Path("/tmp/b.rs"),
            status=FileStatus.VIOLATIONS,
            messages=("missing license notice line.",),
        )
    )

    ui.render_report(report)

    text = console.export_text()
    assert "violations" in text
    assert "missing license notice line." in text
    assert "checked 1 files, found 1 issue(s)." in text
    assert "1 of 1 files" in text
    assert "run with --fix" in text


def test_failed_fix_reports_leftovers() -> None:
    ui, console = _ui()
    report = _report(
        FileReport(path=Path("/tmp/c.rs"), status=FileStatus.FIX_REFUSED),
        fix=True,
    )

    ui.render_report(report)

    assert "could not be fixed automatically" in console.export_text()


def test_unmatched_patterns_are_listed() -> None:
    ui, console = _ui()
    report = _report()
    report.unmatched_patterns = ["/repo/docs/[draft]/*.go"]

    ui.render_report(report)

    text = console.export_text()
    assert "globs without files" in text
    assert "/repo/docs/[draft]/*.go" in text


def test_conflicts_table(make_rule) -> None:
    ui, console = _ui()
    conflict = PatternConflict(
        pattern="/repo/src/*.rs",
        rule_a=make_rule(origin="a.toml"),
        rule_b=make_rule(holder="Other", origin="b.toml", order=1),
    )

    ui.render_conflicts([conflict])

    text = console.export_text()
    assert "conflicting config" in text
    assert "/repo/src/*.rs" in text
    assert "Other" in text
