from typing import Optional

import click
from rich.console import Console

from lisensor.config import load_sources
from lisensor.discovery import FileDiscovery
from lisensor.errors import ConfigError, PatternConflictError
from lisensor.glob_index import GlobIndex
from lisensor.header import HeaderEngine, current_year
from lisensor.logging_setup import configure_logging
from lisensor.runner import LicenseRunner
from lisensor.tui import LicenseConsoleUI


COLOR_VALUES = ["auto", "always", "never"]


def _console(color: str) -> Console:
    if color == "always":
        return Console(force_terminal=True)
    if color == "never":
        return Console(color_system=None)
    return Console()


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Check or fix SPDX license notices.\n\n"
    "PATHS are config files (default: Lisensor.toml in the current directory), "
    "or, in inline config mode, glob patterns for source files.",
)
@click.option("-f", "--fix", is_flag=True, help="Attempt to fix the license notice on the files.")
@click.option("-H", "--holder", help="In inline config mode, the copyright holder.")
@click.option(
    "-L",
    "--license",
    "license_id",
    help="In inline config mode, the SPDX ID of the license.",
)
@click.option(
    "-j",
    "--jobs",
    type=click.IntRange(min=1),
    default=None,
    help="Number of files processed in parallel.",
)
@click.option(
    "--fail-unmatched",
    is_flag=True,
    help="Treat files not covered by any glob as failures.",
)
@click.option("-v", "--verbose", count=True, help="Show more output (repeatable).")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors.")
@click.option(
    "--color",
    type=click.Choice(COLOR_VALUES, case_sensitive=False),
    default="auto",
    help="Colorize output.",
)
@click.argument("paths", nargs=-1)
def cli(
    fix: bool,
    holder: Optional[str],
    license_id: Optional[str],
    jobs: Optional[int],
    fail_unmatched: bool,
    verbose: int,
    quiet: bool,
    color: str,
    paths: tuple[str, ...],
) -> None:
    configure_logging(-1 if quiet else verbose)
    ui = LicenseConsoleUI(_console(color.lower()))

    try:
        sources = load_sources(list(paths), holder=holder, license_id=license_id)
    except ConfigError as exc:
        raise click.ClickException(str(exc))

    index, conflicts = GlobIndex.build(sources)
    if conflicts:
        ui.render_conflicts(conflicts)
        raise click.ClickException(str(PatternConflictError(conflicts)))

    discovered = FileDiscovery(index).discover()
    runner = LicenseRunner(
        index,
        HeaderEngine(current_year()),
        fix=fix,
        jobs=jobs,
        fail_on_unmatched=fail_unmatched,
    )
    report = runner.run(discovered.files)
    report.unmatched_patterns = discovered.unmatched_patterns

    ui.render_report(report, verbose=verbose > 0)

    if report.failed:
        raise click.exceptions.Exit(1)


def main() -> int:
    try:
        # without standalone mode click hands back the code of a raised Exit
        code = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
