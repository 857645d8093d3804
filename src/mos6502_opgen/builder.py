"""
Dense Opcode Table Builder
==========================

Turns the sparse list of authored records into a dense table with exactly
one row per opcode byte 0x00-0xFF.

Bytes the table does not declare get the fallback row
{mnemonic=UNK, length=1, mode=Implied}.

Duplicate Opcode Bytes
----------------------
Two records declaring the same opcode byte are handled according to a
DuplicatePolicy:

- ERROR (default): raise DuplicateOpcodeError naming both declarations.
- LAST_WINS: keep the record declared later in the table and log a warning.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

from mos6502_opgen.errors import DuplicateOpcodeError
from mos6502_opgen.opcodes import (
    AddressingMode,
    InstructionRecord,
    unknown_record,
)
from mos6502_opgen.registry import MnemonicRegistry

logger = logging.getLogger(__name__)

OPCODE_COUNT = 256


class DuplicatePolicy(Enum):
    """How to resolve two records that declare the same opcode byte."""
    ERROR = "error"
    LAST_WINS = "last"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TableRow:
    """
    One row of the dense opcode table.

    Attributes:
        record: The authored record, or the UNK fallback
        mnemonic_index: Registry index of the record's mnemonic
        authored: False when the row is the synthesized fallback
    """
    record: InstructionRecord
    mnemonic_index: int
    authored: bool

    @property
    def opcode(self) -> int:
        return self.record.opcode

    @property
    def mnemonic(self) -> str:
        return self.record.mnemonic

    @property
    def length(self) -> int:
        return self.record.length

    @property
    def mode(self) -> AddressingMode:
        return self.record.mode


class DenseOpcodeTable:
    """
    256-row opcode lookup table plus the mnemonic registry it indexes into.

    Indexing by opcode byte returns the TableRow for that byte:

        >>> table = build_dense_table(load_default_table())
        >>> table[0x69].mnemonic
        'ADC'
    """

    def __init__(self, rows: Iterable[TableRow], registry: MnemonicRegistry):
        self._rows: tuple[TableRow, ...] = tuple(rows)
        if len(self._rows) != OPCODE_COUNT:
            raise ValueError(
                f"dense table needs {OPCODE_COUNT} rows, got {len(self._rows)}"
            )
        self.registry = registry

    @property
    def rows(self) -> tuple[TableRow, ...]:
        return self._rows

    @property
    def fallback_count(self) -> int:
        """Number of opcode bytes with no authored record."""
        return sum(1 for row in self._rows if not row.authored)

    def __getitem__(self, opcode: int) -> TableRow:
        if not 0 <= opcode < OPCODE_COUNT:
            raise IndexError(f"opcode byte out of range: {opcode}")
        return self._rows[opcode]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[TableRow]:
        return iter(self._rows)

    def __repr__(self) -> str:
        return (
            f"DenseOpcodeTable({OPCODE_COUNT - self.fallback_count} authored, "
            f"{self.fallback_count} unknown, {len(self.registry)} mnemonics)"
        )


def index_records(
    records: Iterable[InstructionRecord],
    policy: DuplicatePolicy = DuplicatePolicy.ERROR,
) -> dict[int, InstructionRecord]:
    """
    Map opcode byte to record.

    Raises:
        DuplicateOpcodeError: On a repeated opcode byte under DuplicatePolicy.ERROR
    """
    by_opcode: dict[int, InstructionRecord] = {}

    for record in records:
        previous = by_opcode.get(record.opcode)
        if previous is not None:
            if policy is DuplicatePolicy.ERROR:
                raise DuplicateOpcodeError(
                    record.opcode,
                    location=record.location,
                    original_location=previous.location,
                )
            logger.warning(
                f"Opcode ${record.opcode:02X}: {record.mnemonic} {record.mode} "
                f"replaces {previous.mnemonic} {previous.mode}"
            )
        by_opcode[record.opcode] = record

    return by_opcode


def build_dense_table(
    records: Iterable[InstructionRecord],
    policy: DuplicatePolicy = DuplicatePolicy.ERROR,
    registry: Optional[MnemonicRegistry] = None,
) -> DenseOpcodeTable:
    """
    Build the dense 256-row table from authored records.

    Args:
        records: Parsed table records, in table order
        policy: Duplicate opcode byte resolution
        registry: Mnemonic registry to index into (built from records if None)

    Returns:
        DenseOpcodeTable with one row per opcode byte
    """
    records = list(records)
    if registry is None:
        registry = MnemonicRegistry.from_records(records)

    by_opcode = index_records(records, policy)

    rows = []
    for opcode in range(OPCODE_COUNT):
        record = by_opcode.get(opcode)
        authored = record is not None
        if record is None:
            record = unknown_record(opcode)
        rows.append(TableRow(
            record=record,
            mnemonic_index=registry.index_of(record.mnemonic),
            authored=authored,
        ))

    table = DenseOpcodeTable(rows, registry)
    logger.debug(
        f"Built opcode table: {len(by_opcode)} authored, "
        f"{table.fallback_count} unknown, {len(registry)} mnemonics"
    )
    return table
