"""
6502 Disassembler
=================

Decodes 6502 machine code using the dense opcode table, which is exactly
what the generated table is consumed for.

Architecture:
    - 8-bit data bus, 16-bit address bus
    - Little-endian byte ordering (low byte first)
    - Relative branches are signed 8-bit offsets from the next instruction

Every opcode byte has a table row, so decoding never fails: bytes with no
authored instruction decode as 1-byte UNK.

Usage:
    disasm = Disassembler6502()

    # Disassemble from bytes
    instructions = disasm.disassemble(rom_bytes, start_address=0xC000, count=10)

    # Disassemble single instruction
    instr = disasm.disassemble_one(rom_bytes, address=0xC000)
    print(instr)            # 4C F5 C5  JMP $C5F5
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from mos6502_opgen.builder import DenseOpcodeTable, build_dense_table
from mos6502_opgen.opcodes import AddressingMode
from mos6502_opgen.table import load_default_table

# Widest instruction, used to align listing columns
MAX_INSTRUCTION_LENGTH = 3


# =============================================================================
# Data Structures
# =============================================================================

@dataclass
class DisassembledInstruction:
    """
    A single disassembled 6502 instruction.

    Attributes:
        address: Memory address of the instruction
        opcode: The opcode byte
        mnemonic: The instruction mnemonic (e.g., "LDA", "UNK")
        mode: The addressing mode
        operand_bytes: Raw operand bytes (may be empty)
        operand_str: Formatted operand for display
        size: Instruction size in bytes
        raw_bytes: All bytes comprising this instruction
        comment: Optional comment (branch displacement, truncation)
    """
    address: int
    opcode: int
    mnemonic: str
    mode: AddressingMode
    operand_bytes: bytes
    operand_str: str
    size: int
    raw_bytes: bytes
    comment: str = ""

    def __str__(self) -> str:
        """Format as: BYTES  MNEMONIC OPERAND (bytes padded to 3-byte width)."""
        hex_bytes = " ".join(f"{b:02X}" for b in self.raw_bytes)
        hex_bytes += "   " * (MAX_INSTRUCTION_LENGTH - len(self.raw_bytes))
        return f"{hex_bytes}  {self.mnemonic} {self.operand_str}".rstrip()

    def to_listing_line(self) -> str:
        """Format with address prefix and comment: $ADDR: BYTES  ASM ; comment"""
        line = f"${self.address:04X}: {self}"
        if self.comment:
            line = f"{line:<32} ; {self.comment}"
        return line

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "address": f"${self.address:04X}",
            "address_int": self.address,
            "opcode": f"${self.opcode:02X}",
            "mnemonic": self.mnemonic,
            "mode": str(self.mode),
            "operand": self.operand_str,
            "size": self.size,
            "bytes": [f"${b:02X}" for b in self.raw_bytes],
            "comment": self.comment,
        }


# =============================================================================
# 6502 Disassembler
# =============================================================================

class Disassembler6502:
    """
    Table-driven 6502 disassembler.

    Attributes:
        table: Dense opcode table used for decoding
    """

    def __init__(self, table: Optional[DenseOpcodeTable] = None):
        """
        Initialize the disassembler.

        Args:
            table: Dense opcode table. Defaults to the packaged 6502 table.
        """
        if table is None:
            table = build_dense_table(load_default_table())
        self.table = table

    def disassemble_one(
        self,
        data: bytes,
        address: int = 0,
        offset: int = 0
    ) -> DisassembledInstruction:
        """
        Disassemble a single instruction.

        Args:
            data: Byte buffer containing the instruction
            address: Memory address of the instruction (for branch targets)
            offset: Offset into data buffer where instruction starts

        Returns:
            DisassembledInstruction with decoded information

        Raises:
            ValueError: If offset is beyond the end of data
        """
        if offset >= len(data):
            raise ValueError(f"Offset {offset} beyond data length {len(data)}")

        opcode = data[offset]
        row = self.table[opcode]
        size = row.length

        if offset + size > len(data):
            partial = data[offset:]
            return DisassembledInstruction(
                address=address,
                opcode=opcode,
                mnemonic=row.mnemonic,
                mode=row.mode,
                operand_bytes=bytes(),
                operand_str="???",
                size=len(partial),
                raw_bytes=bytes(partial),
                comment="incomplete instruction"
            )

        raw_bytes = data[offset:offset + size]
        operand_bytes = raw_bytes[1:]

        operand_str, comment = self._format_operand(row.mode, operand_bytes, address, size)

        return DisassembledInstruction(
            address=address,
            opcode=opcode,
            mnemonic=row.mnemonic,
            mode=row.mode,
            operand_bytes=bytes(operand_bytes),
            operand_str=operand_str,
            size=size,
            raw_bytes=bytes(raw_bytes),
            comment=comment
        )

    def _format_operand(
        self,
        mode: AddressingMode,
        operand_bytes: bytes,
        address: int,
        size: int
    ) -> Tuple[str, str]:
        """
        Format the operand string based on addressing mode.

        Returns:
            Tuple of (operand_string, comment_string)
        """
        if mode == AddressingMode.IMPLIED:
            return "", ""

        if mode == AddressingMode.ACCUMULATOR:
            return "A", ""

        if mode.operand_size == 2:
            # Little-endian word
            word = operand_bytes[0] | (operand_bytes[1] << 8)
            if mode == AddressingMode.ABSOLUTE:
                return f"${word:04X}", ""
            elif mode == AddressingMode.ABSOLUTE_X:
                return f"${word:04X},X", ""
            elif mode == AddressingMode.ABSOLUTE_Y:
                return f"${word:04X},Y", ""
            else:
                return f"(${word:04X})", ""

        value = operand_bytes[0]

        if mode == AddressingMode.RELATIVE:
            # Displacement is relative to the address AFTER the branch
            disp = value - 256 if value >= 0x80 else value
            target = (address + size + disp) & 0xFFFF
            comment = f"+{disp}" if disp >= 0 else f"{disp}"
            return f"${target:04X}", comment

        return {
            AddressingMode.IMMEDIATE: f"#${value:02X}",
            AddressingMode.ZERO_PAGE: f"${value:02X}",
            AddressingMode.ZERO_PAGE_X: f"${value:02X},X",
            AddressingMode.ZERO_PAGE_Y: f"${value:02X},Y",
            AddressingMode.INDIRECT_PLUS_Y: f"(${value:02X}),Y",
            AddressingMode.INDIRECT_X: f"(${value:02X},X)",
            AddressingMode.INDIRECT_Y: f"(${value:02X},Y)",
        }[mode], ""

    def disassemble(
        self,
        data: bytes,
        start_address: int = 0,
        count: Optional[int] = None,
        max_bytes: Optional[int] = None
    ) -> List[DisassembledInstruction]:
        """
        Disassemble multiple instructions.

        Args:
            data: Byte buffer containing machine code
            start_address: Memory address of first byte
            count: Maximum number of instructions to disassemble (None = all)
            max_bytes: Maximum number of bytes to process (None = all)

        Returns:
            List of DisassembledInstruction objects
        """
        result = []
        offset = 0
        address = start_address

        while offset < len(data):
            if count is not None and len(result) >= count:
                break
            if max_bytes is not None and offset >= max_bytes:
                break

            instr = self.disassemble_one(data, address, offset)
            result.append(instr)

            offset += instr.size
            address = (address + instr.size) & 0xFFFF

        return result

    def disassemble_to_text(
        self,
        data: bytes,
        start_address: int = 0,
        count: Optional[int] = None
    ) -> str:
        """Disassemble and return a listing, one instruction per line."""
        instructions = self.disassemble(data, start_address, count)
        return "\n".join(instr.to_listing_line() for instr in instructions)
