"""
m6502gen - Opcode Table Generator Command-Line Interface
========================================================

Generates the 6502 mnemonic name table, mnemonic and addressing mode
enumerations, and the 256-entry opcode table as C++ declarations.

Usage Examples
--------------
Generate from the packaged 6502 table:
    $ m6502gen

Write to a file:
    $ m6502gen -o disassembler_tables.inc

Use a custom table, letting later lines override repeated opcodes:
    $ m6502gen --table my_opcodes.txt --on-duplicate last

Exit Codes
----------
0 - Success
1 - Malformed table or duplicate opcode byte
2 - Invalid arguments or missing table file
3 - Internal error
"""

import logging
from pathlib import Path
from typing import Optional

import click

from mos6502_opgen import __version__
from mos6502_opgen.builder import DuplicatePolicy
from mos6502_opgen.cli import setup_logging
from mos6502_opgen.cli.errors import handle_cli_exception
from mos6502_opgen.config import GeneratorConfig
from mos6502_opgen.generator import generate

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.option(
    "-t", "--table",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Opcode table file (default: packaged 6502 table)",
)
@click.option(
    "--on-duplicate",
    type=click.Choice([policy.value for policy in DuplicatePolicy]),
    default=DuplicatePolicy.ERROR.value,
    show_default=True,
    help="What to do when two lines declare the same opcode byte: "
         "'error' aborts, 'last' keeps the later line.",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="m6502gen")
def main(
    table: Optional[Path],
    on_duplicate: str,
    output: Optional[Path],
    verbose: bool,
) -> None:
    """
    Generate 6502 opcode table declarations.

    Reads the opcode table and prints the mnemonic name array, the mnemonic
    index enumeration, the addressing mode enumeration and the 256-entry
    disassembler table.

    \b
    Examples:
        m6502gen                       # Packaged table to stdout
        m6502gen -o tables.inc         # Write to a file
        m6502gen -t custom.txt         # Use a custom table
    """
    setup_logging(verbose)

    config = GeneratorConfig(
        table_path=table,
        duplicate_policy=DuplicatePolicy(on_duplicate),
    )

    try:
        source = generate(config)

        if output:
            output.write_text(source, encoding="utf-8")
            logger.info(f"Output written to: {output}")
        else:
            click.echo(source, nl=False)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Generation")


if __name__ == "__main__":
    main()
