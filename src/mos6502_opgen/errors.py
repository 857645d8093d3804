"""
Opcode Generator Error Hierarchy
================================

This module defines the exception hierarchy for the opcode table generator.
All exceptions inherit from OpgenError, allowing callers to catch every
generator-related error with a single except clause if desired.

Exception Hierarchy
-------------------
OpgenError (base)
└── TableError (opcode table input)
    ├── TableSyntaxError - malformed line (field count, length, mnemonic)
    ├── InvalidOpcodeError - opcode byte is not a hex value in 00-FF
    ├── UnknownAddressingModeError - addressing mode label not recognized
    ├── InconsistentLengthError - length disagrees with addressing mode
    └── DuplicateOpcodeError - two lines declare the same opcode byte

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)

Generation is all-or-nothing: any of these errors aborts the run before a
single line of output is written.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class OpgenError(Exception):
    """
    Base exception for all opcode generator errors.

        try:
            source = generate()
        except OpgenError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Location of a line in an opcode table file.

    Attributes:
        filename: Name of the table file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Table Exceptions
# =============================================================================

class TableError(OpgenError):
    """
    Base exception for errors in the opcode table input.

    Attributes:
        message: The error description
        location: Where in the table the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The offending table line (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            opcodes.txt:12:1: error: unknown addressing mode 'Zero Pag'
                Zero Pag    |ADC|65|2
                ^
            hint: did you mean 'Zero Page'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class TableSyntaxError(TableError):
    """
    Malformed opcode table line.

    Examples:
        - Wrong number of pipe-separated fields
        - Empty or over-long mnemonic
        - Instruction length that is not an integer in 1-3
    """
    pass


class InvalidOpcodeError(TableError):
    """Opcode field is not a hexadecimal byte value (00-FF)."""

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"invalid opcode byte '{text}'",
            location=location,
            hint="opcode must be a hexadecimal value between 00 and FF",
            source_line=source_line,
        )


class UnknownAddressingModeError(TableError):
    """
    Addressing mode label outside the closed set of 6502 modes.

    The error suggests close matches, which catches most typos in
    hand-edited tables.
    """

    def __init__(
        self,
        label: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_labels: Optional[list[str]] = None,
    ):
        self.label = label
        self.similar_labels = similar_labels or []

        hint = None
        if self.similar_labels:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_labels[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unknown addressing mode '{label}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class InconsistentLengthError(TableError):
    """
    Instruction length does not match its addressing mode.

    Every 6502 addressing mode implies a fixed operand size, so the total
    length is 1 + operand size. For example, "Absolute" instructions are
    always 3 bytes long.
    """

    def __init__(
        self,
        mnemonic: str,
        mode: str,
        length: int,
        expected: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        self.mode = mode
        self.length = length
        self.expected = expected
        super().__init__(
            f"'{mnemonic}' with {mode} addressing is {expected} bytes, not {length}",
            location=location,
            source_line=source_line,
        )


class DuplicateOpcodeError(TableError):
    """
    Opcode byte declared by more than one table line.

    Includes the location of the first declaration when available.
    """

    def __init__(
        self,
        opcode: int,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.opcode = opcode
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"${opcode:02X} was first declared at {original_location}"

        super().__init__(
            f"duplicate opcode byte ${opcode:02X}",
            location=location,
            hint=hint,
            source_line=source_line,
        )
