"""
6502 Instruction Set Definitions
================================

Core types shared by the table parser, the dense table builder, the emitter
and the disassembler.

Addressing Modes
----------------
The 6502 has a closed set of addressing modes. Each one implies a fixed
operand size, so the instruction length is always 1 + operand size:

==============  ==============  =======  ================
Mode            Table label     Length   Operand syntax
==============  ==============  =======  ================
ABSOLUTE        Absolute        3        $hhhh
ABSOLUTE_X      Absolute,X      3        $hhhh,X
ABSOLUTE_Y      Absolute,Y      3        $hhhh,Y
ACCUMULATOR     Accumulator     1        A
IMMEDIATE       Immediate       2        #$hh
IMPLIED         Implied         1        (none)
INDIRECT        Indirect        3        ($hhhh)
RELATIVE        Relative        2        $hhhh (branch target)
ZERO_PAGE       Zero Page       2        $hh
ZERO_PAGE_X     Zero Page,X     2        $hh,X
ZERO_PAGE_Y     Zero Page,Y     2        $hh,Y
INDIRECT_PLUS_Y (Indirect),Y    2        ($hh),Y
INDIRECT_X      (Indirect,X)    2        ($hh,X)
INDIRECT_Y      (Indirect,Y)    2        ($hh,Y)
==============  ==============  =======  ================

The declaration order above is the order of the generated AddressingMode
enumeration and must not change.

Reference
---------
- 6502 instruction reference: http://www.obelisk.me.uk/6502/reference.html
- Undocumented opcodes: http://nesdev.com/undocumented_opcodes.txt
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from mos6502_opgen.errors import SourceLocation


# =============================================================================
# Addressing Mode Enumeration
# =============================================================================

class AddressingMode(Enum):
    """6502 addressing modes, in generated enumeration order."""
    ABSOLUTE = auto()
    ABSOLUTE_X = auto()
    ABSOLUTE_Y = auto()
    ACCUMULATOR = auto()
    IMMEDIATE = auto()
    IMPLIED = auto()
    INDIRECT = auto()
    RELATIVE = auto()
    ZERO_PAGE = auto()
    ZERO_PAGE_X = auto()
    ZERO_PAGE_Y = auto()
    INDIRECT_PLUS_Y = auto()
    INDIRECT_X = auto()
    INDIRECT_Y = auto()

    @property
    def label(self) -> str:
        """Label used for this mode in the opcode table file."""
        return _MODE_LABELS[self]

    @property
    def pascal_name(self) -> str:
        """CamelCase mode name (e.g., "ZeroPageX")."""
        return _MODE_NAMES[self]

    @property
    def operand_size(self) -> int:
        """Number of operand bytes following the opcode (0, 1 or 2)."""
        return _OPERAND_SIZES[self]

    @property
    def length(self) -> int:
        """Total instruction length in bytes."""
        return 1 + self.operand_size

    @classmethod
    def from_label(cls, label: str) -> Optional["AddressingMode"]:
        """Look up a mode by its table label, or None if not recognized."""
        return _LABEL_TO_MODE.get(label)

    def __str__(self) -> str:
        return self.label


_MODE_LABELS: dict[AddressingMode, str] = {
    AddressingMode.ABSOLUTE: "Absolute",
    AddressingMode.ABSOLUTE_X: "Absolute,X",
    AddressingMode.ABSOLUTE_Y: "Absolute,Y",
    AddressingMode.ACCUMULATOR: "Accumulator",
    AddressingMode.IMMEDIATE: "Immediate",
    AddressingMode.IMPLIED: "Implied",
    AddressingMode.INDIRECT: "Indirect",
    AddressingMode.RELATIVE: "Relative",
    AddressingMode.ZERO_PAGE: "Zero Page",
    AddressingMode.ZERO_PAGE_X: "Zero Page,X",
    AddressingMode.ZERO_PAGE_Y: "Zero Page,Y",
    AddressingMode.INDIRECT_PLUS_Y: "(Indirect),Y",
    AddressingMode.INDIRECT_X: "(Indirect,X)",
    AddressingMode.INDIRECT_Y: "(Indirect,Y)",
}

_MODE_NAMES: dict[AddressingMode, str] = {
    AddressingMode.ABSOLUTE: "Absolute",
    AddressingMode.ABSOLUTE_X: "AbsoluteX",
    AddressingMode.ABSOLUTE_Y: "AbsoluteY",
    AddressingMode.ACCUMULATOR: "Accumulator",
    AddressingMode.IMMEDIATE: "Immediate",
    AddressingMode.IMPLIED: "Implied",
    AddressingMode.INDIRECT: "Indirect",
    AddressingMode.RELATIVE: "Relative",
    AddressingMode.ZERO_PAGE: "ZeroPage",
    AddressingMode.ZERO_PAGE_X: "ZeroPageX",
    AddressingMode.ZERO_PAGE_Y: "ZeroPageY",
    AddressingMode.INDIRECT_PLUS_Y: "IndirectPlusY",
    AddressingMode.INDIRECT_X: "IndirectX",
    AddressingMode.INDIRECT_Y: "IndirectY",
}

_OPERAND_SIZES: dict[AddressingMode, int] = {
    AddressingMode.ABSOLUTE: 2,
    AddressingMode.ABSOLUTE_X: 2,
    AddressingMode.ABSOLUTE_Y: 2,
    AddressingMode.ACCUMULATOR: 0,
    AddressingMode.IMMEDIATE: 1,
    AddressingMode.IMPLIED: 0,
    AddressingMode.INDIRECT: 2,
    AddressingMode.RELATIVE: 1,
    AddressingMode.ZERO_PAGE: 1,
    AddressingMode.ZERO_PAGE_X: 1,
    AddressingMode.ZERO_PAGE_Y: 1,
    AddressingMode.INDIRECT_PLUS_Y: 1,
    AddressingMode.INDIRECT_X: 1,
    AddressingMode.INDIRECT_Y: 1,
}

_LABEL_TO_MODE: dict[str, AddressingMode] = {
    label: mode for mode, label in _MODE_LABELS.items()
}

# Labels in table-file spelling, for "did you mean" suggestions
MODE_LABELS: tuple[str, ...] = tuple(_MODE_LABELS[mode] for mode in AddressingMode)


# =============================================================================
# Instruction Records
# =============================================================================

# Sentinel mnemonic for opcode bytes with no authored instruction
UNKNOWN_MNEMONIC = "UNK"

# Longest mnemonic the fixed-width name table can hold (char[4] with NUL)
MAX_MNEMONIC_LENGTH = 3


@dataclass(frozen=True)
class InstructionRecord:
    """
    One authored opcode table line.

    Immutable once parsed. The source location is carried for error
    reporting only and does not take part in equality.

    Attributes:
        opcode: Opcode byte (0x00-0xFF)
        mnemonic: Instruction mnemonic (e.g., "ADC", "KIL")
        mode: Addressing mode
        length: Total instruction length in bytes (1-3)
        location: Where the record was declared, if parsed from text
    """
    opcode: int
    mnemonic: str
    mode: AddressingMode
    length: int
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def __repr__(self) -> str:
        return (
            f"InstructionRecord(opcode=${self.opcode:02X}, mnemonic={self.mnemonic!r}, "
            f"mode={self.mode.name}, length={self.length})"
        )


def unknown_record(opcode: int) -> InstructionRecord:
    """Fallback record for an opcode byte the table does not declare."""
    return InstructionRecord(
        opcode=opcode,
        mnemonic=UNKNOWN_MNEMONIC,
        mode=AddressingMode.IMPLIED,
        length=1,
    )
