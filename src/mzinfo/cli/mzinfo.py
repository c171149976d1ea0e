"""
mzinfo - MZ Executable Inspector Command-Line Interface
=======================================================

This module implements the command-line interface for inspecting MS-DOS
MZ executables. It prints header geometry, memory limits, initial
registers and the resolved relocation table.

Usage Examples
--------------
Inspect an executable:
    $ mzinfo GAME.EXE

Include the word checksum status:
    $ mzinfo GAME.EXE --checksum

Show debug logging on stderr:
    $ mzinfo GAME.EXE -v

Inspect a file whose name starts with a dash:
    $ mzinfo -- -v

Exit Status
-----------
0 when the header is valid and the report was printed, even if no
relocation target could be resolved. 1 on a usage error, an unreadable
file, a truncated header, a bad signature or a truncated relocation table.
Nothing is written to stdout on failure: a truncated relocation table
aborts before the header report is printed.
"""

import logging
from pathlib import Path

import click

from mzinfo import __version__
from mzinfo.cli.errors import ExitCode, handle_cli_exception
from mzinfo.exe import ExeParser, format_checksum, format_report

logger = logging.getLogger(__name__)


class InspectCommand(click.Command):
    """Click command whose usage errors exit with status 1."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = ExitCode.FAILURE
            raise


def setup_logging(verbose: bool) -> None:
    """Configure logging on stderr based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(cls=InspectCommand)
@click.argument(
    "input_file",
    type=click.Path(path_type=Path),
)
@click.option(
    "--checksum",
    is_flag=True,
    help="Also report the MZ word checksum (informational only)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(__version__, "--version", "-V", prog_name="mzinfo")
def main(input_file: Path, checksum: bool, verbose: bool) -> None:
    """
    Inspect an MS-DOS MZ executable.

    INPUT_FILE is the executable to inspect. The report lists header
    size, whole file size, load size, memory limits, initial SS:SP and
    CS:IP, and every relocation whose target word could be read.

    \b
    Examples:
      mzinfo GAME.EXE
      mzinfo GAME.EXE --checksum
      mzinfo -- -v          (a file named "-v")
    """
    setup_logging(verbose)

    try:
        parser = ExeParser.from_file(input_file, checksum=checksum)
    except Exception as e:
        handle_cli_exception(e, verbose)

    for line in format_report(parser):
        click.echo(line)

    if parser.checksum is not None:
        click.echo(format_checksum(parser.checksum))

    if parser.skipped:
        logger.debug(f"{parser.skipped} relocation target(s) could not be read")


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
