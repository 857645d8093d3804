"""
m6502dis - 6502 Disassembler Command-Line Interface
===================================================

Disassembles 6502 machine code with the same opcode table the generator
emits, including the undocumented opcodes.

Usage Examples
--------------
Disassemble a binary:
    $ m6502dis program.bin

With base address:
    $ m6502dis program.bin --address 0xC000

Limit number of instructions:
    $ m6502dis program.bin --count 20

Output to file:
    $ m6502dis program.bin -o listing.asm
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from mos6502_opgen import __version__
from mos6502_opgen.cli import setup_logging
from mos6502_opgen.cli.errors import ExitCode, handle_cli_exception
from mos6502_opgen.config import GeneratorConfig
from mos6502_opgen.disassembler import Disassembler6502
from mos6502_opgen.generator import build_table

logger = logging.getLogger(__name__)


def parse_address(text: str) -> int:
    """
    Parse an address given as hex ("0x8000", "$8000") or decimal.

    Raises:
        ValueError: If the text is not a number
    """
    if text.lower().startswith("0x"):
        return int(text, 16)
    elif text.startswith("$"):
        return int(text[1:], 16)
    return int(text)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-a", "--address",
    type=str,
    default="0",
    help="Base address for disassembly (hex with 0x or $ prefix, or decimal). Default: 0",
)
@click.option(
    "-c", "--count",
    type=int,
    default=None,
    help="Maximum number of instructions to disassemble (default: all)",
)
@click.option(
    "-t", "--table",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Opcode table file (default: packaged 6502 table)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="m6502dis")
def main(
    input_file: Path,
    output: Optional[Path],
    address: str,
    count: Optional[int],
    table: Optional[Path],
    verbose: bool,
) -> None:
    """
    Disassemble 6502 machine code.

    INPUT_FILE is the binary file to disassemble.

    \b
    Examples:
        m6502dis code.bin --address 0xC000
        m6502dis code.bin --count 20 -o listing.asm
    """
    setup_logging(verbose)

    try:
        base_address = parse_address(address)
    except ValueError:
        click.echo(f"Error: Invalid address '{address}'", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    if not 0 <= base_address <= 0xFFFF:
        click.echo("Error: Address must be 0-65535 (0x0000-0xFFFF)", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    try:
        data = input_file.read_bytes()
        if len(data) == 0:
            click.echo(f"Error: {input_file} is empty", err=True)
            sys.exit(ExitCode.INVALID_ARGS)

        logger.debug(f"Input file: {input_file} ({len(data)} bytes)")
        logger.debug(f"Base address: ${base_address:04X}")

        disasm = Disassembler6502(build_table(GeneratorConfig(table_path=table)))
        instructions = disasm.disassemble(data, start_address=base_address, count=count)

        output_lines = [
            f"; Disassembly of {input_file.name}",
            f"; Size: {len(data)} bytes",
            f"; Base address: ${base_address:04X}",
            "",
        ]
        output_lines.extend(instr.to_listing_line() for instr in instructions)
        result = "\n".join(output_lines) + "\n"

        if output:
            output.write_text(result, encoding="utf-8")
            logger.info(f"Output written to: {output}")
        else:
            click.echo(result, nl=False)

        logger.debug(f"Instructions disassembled: {len(instructions)}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Disassembly")


if __name__ == "__main__":
    main()
