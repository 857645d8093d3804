"""
mos6502-opgen - 6502 Opcode Table Generator
===========================================

This package turns a hand-authored table of the 6502 instruction set into
the lookup tables a disassembler needs: a mnemonic name array, a mnemonic
index enumeration, an addressing mode enumeration, and a dense 256-entry
table indexed by opcode byte. Undocumented opcodes are included; bytes the
table does not declare decode as UNK.

Main Components
---------------
- **table**: Opcode table parser
    Reads ``addressing mode | mnemonic | opcode | length`` lines

- **registry**: Mnemonic registry
    Deduplicates and sorts mnemonics, assigns stable indices

- **builder**: Dense table builder
    One row per opcode byte, with UNK fallback rows

- **emitter**: Source emitter
    Renders the C++ declarations

- **disassembler**: Table-driven 6502 disassembler

Quick Start
-----------
Generate the declarations:
    >>> from mos6502_opgen import generate
    >>> print(generate())

Inspect the table:
    >>> from mos6502_opgen import build_dense_table, load_default_table
    >>> table = build_dense_table(load_default_table())
    >>> table[0x69].mnemonic, table[0x69].length
    ('ADC', 2)

Disassemble:
    >>> from mos6502_opgen import Disassembler6502
    >>> print(Disassembler6502().disassemble_one(bytes([0xA9, 0x10])))
    A9 10     LDA #$10

Or use the command-line tools:
    $ m6502gen -o tables.inc
    $ m6502dis program.bin --address 0xC000

Reference Documentation
-----------------------
- 6502 instruction reference: http://www.obelisk.me.uk/6502/reference.html
- Undocumented opcodes: http://nesdev.com/undocumented_opcodes.txt
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from mos6502_opgen.errors import (
    OpgenError,
    SourceLocation,
    TableError,
    TableSyntaxError,
    InvalidOpcodeError,
    UnknownAddressingModeError,
    InconsistentLengthError,
    DuplicateOpcodeError,
)
from mos6502_opgen.opcodes import (
    AddressingMode,
    InstructionRecord,
    UNKNOWN_MNEMONIC,
)
from mos6502_opgen.table import (
    DEFAULT_TABLE_PATH,
    parse_line,
    parse_table,
    load_table,
    load_default_table,
)
from mos6502_opgen.registry import MnemonicRegistry
from mos6502_opgen.builder import (
    OPCODE_COUNT,
    DuplicatePolicy,
    TableRow,
    DenseOpcodeTable,
    build_dense_table,
)
from mos6502_opgen.config import GeneratorConfig
from mos6502_opgen.emitter import emit_source
from mos6502_opgen.generator import build_table, generate
from mos6502_opgen.disassembler import Disassembler6502, DisassembledInstruction

__all__ = [
    # Version info
    "__version__",
    # Exception hierarchy
    "OpgenError",
    "SourceLocation",
    "TableError",
    "TableSyntaxError",
    "InvalidOpcodeError",
    "UnknownAddressingModeError",
    "InconsistentLengthError",
    "DuplicateOpcodeError",
    # Instruction set
    "AddressingMode",
    "InstructionRecord",
    "UNKNOWN_MNEMONIC",
    # Parser
    "DEFAULT_TABLE_PATH",
    "parse_line",
    "parse_table",
    "load_table",
    "load_default_table",
    # Registry and dense table
    "MnemonicRegistry",
    "OPCODE_COUNT",
    "DuplicatePolicy",
    "TableRow",
    "DenseOpcodeTable",
    "build_dense_table",
    # Generation
    "GeneratorConfig",
    "emit_source",
    "build_table",
    "generate",
    # Disassembler
    "Disassembler6502",
    "DisassembledInstruction",
]
