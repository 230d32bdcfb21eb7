from rich.markup import escape
from rich.table import Column, Table

from lisensor.models import FileReport, PatternConflict, RunReport
from lisensor.tui.enums import FILE_STATUS_STYLE, UIStyle
from lisensor.utils import display_path


class ReportTable:
    @staticmethod
    def summary_block(report: RunReport, mode: str) -> Table:
        counts = report.summary()
        chips = [
            f"{status.value}={counts[status.value]}"
            for status in FILE_STATUS_STYLE
            if counts[status.value] > 0
        ]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Files", str(report.total))
        table.add_row("Skipped", str(len(report.skipped)))
        table.add_row("Statuses", "  ".join(chips))
        return table

    @staticmethod
    def files_table(reports: list[FileReport]) -> Table:
        table = Table(
            Column(header="File", overflow="fold", max_width=60),
            Column(header="Status", width=20),
            Column(header="Detail", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for report in reports:
            style = FILE_STATUS_STYLE.get(report.status, UIStyle.WHITE.value)
            table.add_row(
                escape(display_path(report.path)),
                f"[{style}]{report.status.value}[/{style}]",
                escape(report.detail),
            )
        return table


class ConflictTable:
    @staticmethod
    def conflicts_table(conflicts: list[PatternConflict]) -> Table:
        table = Table(
            Column(header="Glob", overflow="fold"),
            Column(header="First", overflow="fold"),
            Column(header="Second", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for conflict in conflicts:
            table.add_row(
                escape(conflict.pattern),
                escape(conflict.rule_a.describe()),
                escape(conflict.rule_b.describe()),
            )
        return table
