"""
Generator Configuration
=======================

Settings for a generation run. The defaults reproduce the declarations the
6502 disassembler consumes, so ``GeneratorConfig()`` is all a normal run
needs. The CLI builds one of these from its options.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mos6502_opgen.builder import DuplicatePolicy


@dataclass
class GeneratorConfig:
    """
    Configuration for opcode table generation.

    Attributes:
        table_path: Opcode table file to read (None = packaged 6502 table)
        duplicate_policy: Resolution of repeated opcode bytes (default: ERROR)
        name_array: Identifier of the mnemonic name array
        index_enum: Identifier of the mnemonic index enumeration
        name_suffix: Suffix appended to mnemonics to form enumerator names
        mode_enum: Identifier of the addressing mode enumeration
        entry_type: Type (and constructor) of a dense table entry
        table_name: Identifier of the dense table array
    """

    table_path: Optional[Path] = None
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.ERROR

    # Generated identifiers
    name_array: str = "prettyOpcodeName"
    index_enum: str = "PrettyOpcodeIndex"
    name_suffix: str = "_Pretty"
    mode_enum: str = "AddressingMode"
    entry_type: str = "DisassemblerEntry"
    table_name: str = "disassemblerTable"

    def enumerator(self, mnemonic: str) -> str:
        """Enumerator name for a mnemonic (e.g., "ADC" -> "ADC_Pretty")."""
        return f"{mnemonic}{self.name_suffix}"
