"""
Opcode Table Parser
===================

Reads the hand-authored 6502 opcode table into InstructionRecord objects.

Table Format
------------
One instruction variant per line, four pipe-separated fields:

    addressing mode | mnemonic | opcode byte (hex) | instruction length

For example:

    Immediate   |ADC|69|2
    Zero Page,X |ADC|75|2
    (Indirect),Y|ADC|71|2

Whitespace around fields is insignificant. Blank lines and lines starting
with '#' are skipped.

The parser validates each line in isolation (field count, opcode byte,
addressing mode label, length against the mode). Cross-line checks such as
duplicate opcode bytes belong to the dense table builder.

Usage:
    records = load_default_table()
    records = parse_table(text, filename="custom.txt")
"""

import logging
import re
from pathlib import Path
from typing import Iterable, Union

from mos6502_opgen.errors import (
    InconsistentLengthError,
    InvalidOpcodeError,
    SourceLocation,
    TableSyntaxError,
    UnknownAddressingModeError,
)
from mos6502_opgen.opcodes import (
    MAX_MNEMONIC_LENGTH,
    MODE_LABELS,
    AddressingMode,
    InstructionRecord,
)

logger = logging.getLogger(__name__)

# Packaged 6502 opcode table
DEFAULT_TABLE_PATH = Path(__file__).parent / "data" / "opcodes.txt"

FIELD_SEPARATOR = "|"
FIELD_COUNT = 4
COMMENT_PREFIX = "#"
BYTE_ORDER_MARK = "\ufeff"

_OPCODE_RE = re.compile(r"[0-9A-Fa-f]{1,2}")
_MNEMONIC_RE = re.compile(r"[A-Za-z][A-Za-z0-9]*")


# =============================================================================
# Line Parsing
# =============================================================================

def _split_fields(line: str) -> list[tuple[str, int]]:
    """
    Split a line into stripped fields with their 1-indexed start columns.

    The column points at the first non-blank character of each field, so
    error carets land on the offending value.
    """
    fields = []
    start = 0
    for raw in line.split(FIELD_SEPARATOR):
        leading = len(raw) - len(raw.lstrip())
        fields.append((raw.strip(), start + leading + 1))
        start += len(raw) + len(FIELD_SEPARATOR)
    return fields


def _edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = range(len(s2) + 1)
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min((
                    distances[j], distances[j + 1], new_distances[-1]
                )))
        distances = new_distances
    return distances[-1]


def _find_similar_labels(label: str) -> list[str]:
    """Find addressing mode labels close to a misspelled one."""
    label_lower = label.lower()
    similar = []

    for candidate in MODE_LABELS:
        candidate_lower = candidate.lower()
        if (
            candidate_lower == label_lower or
            abs(len(candidate) - len(label)) <= 2 and
            _edit_distance(label_lower, candidate_lower) <= 2
        ):
            similar.append(candidate)

    return similar[:3]


def parse_line(
    line: str,
    line_number: int = 1,
    filename: str = "<input>",
) -> InstructionRecord:
    """
    Parse a single opcode table line.

    Args:
        line: The table line (without trailing newline)
        line_number: 1-indexed line number for error reporting
        filename: Table name for error reporting

    Returns:
        The parsed InstructionRecord

    Raises:
        TableSyntaxError: Wrong field count, bad mnemonic or bad length
        InvalidOpcodeError: Opcode field is not a hex byte
        UnknownAddressingModeError: Addressing mode label not recognized
        InconsistentLengthError: Length disagrees with the addressing mode
    """
    source_line = line.rstrip("\r\n")
    fields = _split_fields(source_line)

    def location(column: int = 1) -> SourceLocation:
        return SourceLocation(filename, line_number, column)

    if len(fields) != FIELD_COUNT:
        raise TableSyntaxError(
            f"expected {FIELD_COUNT} fields separated by '{FIELD_SEPARATOR}', "
            f"found {len(fields)}",
            location=location(),
            hint="format is: addressing mode | mnemonic | opcode | length",
            source_line=source_line,
        )

    (label, label_col), (mnemonic, mnemonic_col), (opcode_text, opcode_col), \
        (length_text, length_col) = fields

    # Addressing mode
    mode = AddressingMode.from_label(label)
    if mode is None:
        raise UnknownAddressingModeError(
            label,
            location=location(label_col),
            source_line=source_line,
            similar_labels=_find_similar_labels(label),
        )

    # Mnemonic
    if len(mnemonic) > MAX_MNEMONIC_LENGTH or not _MNEMONIC_RE.fullmatch(mnemonic):
        raise TableSyntaxError(
            f"invalid mnemonic '{mnemonic}'",
            location=location(mnemonic_col),
            hint=f"mnemonics are 1 to {MAX_MNEMONIC_LENGTH} alphanumeric characters",
            source_line=source_line,
        )

    # Opcode byte
    if not _OPCODE_RE.fullmatch(opcode_text):
        raise InvalidOpcodeError(
            opcode_text,
            location=location(opcode_col),
            source_line=source_line,
        )
    opcode = int(opcode_text, 16)

    # Instruction length
    try:
        length = int(length_text)
    except ValueError:
        length = None
    if length is None or not 1 <= length <= 3:
        raise TableSyntaxError(
            f"invalid instruction length '{length_text}'",
            location=location(length_col),
            hint="length must be 1, 2 or 3",
            source_line=source_line,
        )

    if length != mode.length:
        raise InconsistentLengthError(
            mnemonic,
            str(mode),
            length,
            mode.length,
            location=location(length_col),
            source_line=source_line,
        )

    return InstructionRecord(
        opcode=opcode,
        mnemonic=mnemonic,
        mode=mode,
        length=length,
        location=location(),
    )


# =============================================================================
# Table Parsing
# =============================================================================

def _is_content(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith(COMMENT_PREFIX)


def parse_lines(
    lines: Iterable[str],
    filename: str = "<input>",
) -> list[InstructionRecord]:
    """
    Parse table lines into records, preserving file order.

    Args:
        lines: Table lines (trailing newlines allowed)
        filename: Table name for error reporting

    Returns:
        Records in the order they appear in the table
    """
    records = [
        parse_line(line, line_number, filename)
        for line_number, line in enumerate(lines, start=1)
        if _is_content(line)
    ]
    logger.debug(f"Parsed {len(records)} records from {filename}")
    return records


def parse_table(text: str, filename: str = "<input>") -> list[InstructionRecord]:
    """
    Parse a complete opcode table held in a string.

    Example:
        >>> records = parse_table("Immediate|ADC|69|2")
        >>> records[0].opcode
        105
    """
    return parse_lines(text.splitlines(), filename)


def load_table(path: Union[str, Path]) -> list[InstructionRecord]:
    """
    Load and parse an opcode table file.

    A leading UTF-8 byte order mark is ignored.

    Raises:
        FileNotFoundError: If the file does not exist
        TableError: If any line is malformed or not valid UTF-8
    """
    path = Path(path)
    logger.debug(f"Loading opcode table from {path}")
    data = path.read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        line_number = data.count(b"\n", 0, e.start) + 1
        line_start = data.rfind(b"\n", 0, e.start) + 1
        raise TableSyntaxError(
            f"invalid UTF-8 byte 0x{data[e.start]:02X}",
            location=SourceLocation(path.name, line_number, e.start - line_start + 1),
            hint="opcode tables must be UTF-8 text",
        ) from e
    if text.startswith(BYTE_ORDER_MARK):
        text = text[len(BYTE_ORDER_MARK):]
    return parse_table(text, filename=path.name)


def load_default_table() -> list[InstructionRecord]:
    """Load the packaged 6502 opcode table."""
    return load_table(DEFAULT_TABLE_PATH)
