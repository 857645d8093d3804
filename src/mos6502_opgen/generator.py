"""
Generation Pipeline
===================

Runs the whole pipeline once: parse the table, build the mnemonic registry
and the dense table, render the declarations.

    >>> from mos6502_opgen import generate
    >>> source = generate()
    >>> print(source)

Everything is rendered in memory; if any stage fails nothing is returned,
so callers never write partial output.
"""

import logging
from typing import Optional

from mos6502_opgen.builder import DenseOpcodeTable, build_dense_table
from mos6502_opgen.config import GeneratorConfig
from mos6502_opgen.emitter import emit_source
from mos6502_opgen.table import load_default_table, load_table

logger = logging.getLogger(__name__)


def build_table(config: Optional[GeneratorConfig] = None) -> DenseOpcodeTable:
    """Load the configured opcode table and build its dense form."""
    config = config or GeneratorConfig()

    if config.table_path is not None:
        records = load_table(config.table_path)
    else:
        records = load_default_table()

    return build_dense_table(records, policy=config.duplicate_policy)


def generate(config: Optional[GeneratorConfig] = None) -> str:
    """
    Generate the opcode table declarations.

    Args:
        config: Generation settings (defaults if None)

    Returns:
        The generated source text

    Raises:
        TableError: If the opcode table is malformed or has duplicate bytes
        FileNotFoundError: If a configured table file does not exist
    """
    config = config or GeneratorConfig()
    table = build_table(config)
    source = emit_source(table, config)
    logger.debug(f"Generated {len(source.splitlines())} lines of source")
    return source
