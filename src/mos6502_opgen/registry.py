"""
Mnemonic Registry
=================

Assigns every mnemonic a stable, dense, zero-based index.

The registry is built in two explicit phases:

1. Collect-and-dedupe: gather every mnemonic referenced by the records into
   a set, plus the UNK sentinel.
2. Sort-and-index: sort the set with ordinary (case-sensitive) string
   ordering and number the entries by position.

Indices depend only on the set of mnemonics, never on the order records
appear in the table, so regenerating from the same table always yields the
same indices.
"""

from typing import Iterable, Iterator

from mos6502_opgen.opcodes import UNKNOWN_MNEMONIC, InstructionRecord


class MnemonicRegistry:
    """
    Sorted set of unique mnemonics with their indices.

    Example:
        >>> registry = MnemonicRegistry(["NOP", "ADC", "NOP"])
        >>> registry.names
        ('ADC', 'NOP', 'UNK')
        >>> registry.index_of("NOP")
        1
    """

    def __init__(self, mnemonics: Iterable[str]):
        unique = set(mnemonics)
        unique.add(UNKNOWN_MNEMONIC)

        self._names: tuple[str, ...] = tuple(sorted(unique))
        self._indices: dict[str, int] = {
            name: index for index, name in enumerate(self._names)
        }

    @classmethod
    def from_records(cls, records: Iterable[InstructionRecord]) -> "MnemonicRegistry":
        """Build a registry from the mnemonics of parsed table records."""
        return cls(record.mnemonic for record in records)

    @property
    def names(self) -> tuple[str, ...]:
        """Mnemonics in index order."""
        return self._names

    @property
    def unknown_index(self) -> int:
        """Index of the UNK sentinel."""
        return self._indices[UNKNOWN_MNEMONIC]

    def index_of(self, mnemonic: str) -> int:
        """
        Return the index of a mnemonic.

        Raises:
            KeyError: If the mnemonic is not registered
        """
        return self._indices[mnemonic]

    def items(self) -> Iterator[tuple[str, int]]:
        """Iterate (mnemonic, index) pairs in index order."""
        return iter(self._indices.items())

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, mnemonic: object) -> bool:
        return mnemonic in self._indices

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __repr__(self) -> str:
        return f"MnemonicRegistry({len(self)} mnemonics)"
