from rich.console import Console
from rich.markup import escape

from lisensor.models import FileStatus, PatternConflict, RunReport
from lisensor.tui.enums import UIStyle
from lisensor.tui.sections import UISection
from lisensor.tui.tables import ConflictTable, ReportTable


class LicenseConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_report(self, report: RunReport, verbose: bool = False) -> None:
        mode = "fix" if report.fix else "check"
        self.console.print(
            UISection.wrap(
                "license overview",
                ReportTable.summary_block(report, mode=mode),
                style=UIStyle.BLUE.value,
            )
        )

        if verbose:
            shown = report.files
        else:
            shown = [item for item in report.files if item.status != FileStatus.CLEAN]
        if shown:
            self.console.print(
                UISection.wrap(
                    "files",
                    ReportTable.files_table(shown),
                    style=UIStyle.YELLOW.value if report.failed else UIStyle.CYAN.value,
                    subtitle=f"{len(shown)} of {report.total} files",
                )
            )

        if report.unmatched_patterns:
            patterns_text = "\n".join(
                [f"- {escape(item)}" for item in report.unmatched_patterns]
            )
            self.console.print(
                UISection.note(
                    "globs without files", patterns_text, style=UIStyle.DIM.value
                )
            )

        self.render_result(report)

    def render_result(self, report: RunReport) -> None:
        failures = report.failures()
        if not failures:
            verb = "fix" if report.fix else "check"
            self.console.print(
                UISection.note(
                    "result",
                    f"license {verb} successful for {report.total} files.",
                    style=UIStyle.GREEN.value,
                )
            )
            return

        lines = [f"checked {report.total} files, found {len(failures)} issue(s)."]
        if report.fix:
            lines.append("some issues could not be fixed automatically.")
        else:
            lines.append("run with --fix to fix them automatically.")
        self.console.print(
            UISection.note("result", "\n".join(lines), style=UIStyle.RED.value)
        )

    def render_conflicts(self, conflicts: list[PatternConflict]) -> None:
        self.console.print(
            UISection.wrap(
                "conflicting config",
                ConflictTable.conflicts_table(conflicts),
                style=UIStyle.RED.value,
                subtitle=f"{len(conflicts)} glob(s)",
            )
        )
