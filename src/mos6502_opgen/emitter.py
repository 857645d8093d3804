"""
Source Emitter
==============

Renders the dense opcode table as C++ declarations. Pure formatting: every
decision has been made by the registry and the table builder.

The output consists of four blocks, in this order:

    const char prettyOpcodeName[][4] = {
    "AAC","AAX","ADC",...
    };

    enum PrettyOpcodeIndex {
    AAC_Pretty = 0,
    ...
    };

    enum AddressingMode {
    AddressingMode_Absolute,
    ...
    };

    DisassemblerEntry disassemblerTable[256] = {
    DisassemblerEntry(0x0, BRK_Pretty, 1, AddressingMode_Implied),
    ...
    };

Identifiers are taken from GeneratorConfig. Output for a given table is
byte-for-byte stable.
"""

from typing import Optional

from mos6502_opgen.builder import DenseOpcodeTable, TableRow
from mos6502_opgen.config import GeneratorConfig
from mos6502_opgen.opcodes import MAX_MNEMONIC_LENGTH, AddressingMode
from mos6502_opgen.registry import MnemonicRegistry


def _block(header: str, body: str) -> str:
    return f"{header} {{\n{body}\n}};\n"


def mode_symbol(mode: AddressingMode, config: GeneratorConfig) -> str:
    """Enumerator name for an addressing mode."""
    return f"{config.mode_enum}_{mode.pascal_name}"


def format_name_array(registry: MnemonicRegistry, config: GeneratorConfig) -> str:
    """Fixed-width array of mnemonic strings, in index order."""
    width = MAX_MNEMONIC_LENGTH + 1
    names = ",".join(f'"{name}"' for name in registry.names)
    return _block(f"const char {config.name_array}[][{width}] =", names)


def format_mnemonic_enum(registry: MnemonicRegistry, config: GeneratorConfig) -> str:
    """Enumeration mapping each mnemonic to its registry index."""
    enumerators = ",\n".join(
        f"{config.enumerator(name)} = {index}"
        for name, index in registry.items()
    )
    return _block(f"enum {config.index_enum}", enumerators)


def format_addressing_mode_enum(config: GeneratorConfig) -> str:
    """Enumeration of addressing modes in declaration order."""
    enumerators = ",\n".join(mode_symbol(mode, config) for mode in AddressingMode)
    return _block(f"enum {config.mode_enum}", enumerators)


def format_row(row: TableRow, config: GeneratorConfig) -> str:
    """
    Format one dense table entry.

    Example:
        DisassemblerEntry(0x69, ADC_Pretty, 2, AddressingMode_Immediate)
    """
    return (
        f"{config.entry_type}(0x{row.opcode:x}, {config.enumerator(row.mnemonic)}, "
        f"{row.length}, {mode_symbol(row.mode, config)})"
    )


def format_dense_table(table: DenseOpcodeTable, config: GeneratorConfig) -> str:
    """The 256-entry table array, one entry per opcode byte."""
    entries = ",\n".join(format_row(row, config) for row in table)
    return _block(f"{config.entry_type} {config.table_name}[{len(table)}] =", entries)


def emit_source(
    table: DenseOpcodeTable,
    config: Optional[GeneratorConfig] = None,
) -> str:
    """
    Render all four declaration blocks.

    Args:
        table: The dense opcode table (with its registry)
        config: Identifier settings (defaults if None)

    Returns:
        Generated source text, ending with a newline
    """
    config = config or GeneratorConfig()
    registry = table.registry

    blocks = [
        format_name_array(registry, config),
        format_mnemonic_enum(registry, config),
        format_addressing_mode_enum(config),
        format_dense_table(table, config),
    ]
    return "\n".join(blocks)
