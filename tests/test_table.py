"""
Unit Tests for the Opcode Table Parser
======================================

Test coverage includes:
- Field splitting and whitespace handling
- Every addressing mode label
- Comment and blank line handling
- Error reporting (field count, opcode, mode, length, mnemonic)
- The packaged 6502 table
"""

import pytest

from mos6502_opgen.errors import (
    InconsistentLengthError,
    InvalidOpcodeError,
    SourceLocation,
    TableError,
    TableSyntaxError,
    UnknownAddressingModeError,
)
from mos6502_opgen.opcodes import AddressingMode, InstructionRecord
from mos6502_opgen.table import (
    DEFAULT_TABLE_PATH,
    load_default_table,
    load_table,
    parse_line,
    parse_table,
)


# =============================================================================
# Line Parsing
# =============================================================================

class TestParseLine:
    """Tests for parsing a single table line."""

    def test_immediate(self):
        """Test a basic immediate-mode line."""
        record = parse_line("Immediate   |ADC|69|2")

        assert record.opcode == 0x69
        assert record.mnemonic == "ADC"
        assert record.mode == AddressingMode.IMMEDIATE
        assert record.length == 2

    def test_whitespace_is_insignificant(self):
        """Test that whitespace around fields is ignored."""
        record = parse_line("  Zero Page,X |  LDY | b4 |   2  ")

        assert record.opcode == 0xB4
        assert record.mnemonic == "LDY"
        assert record.mode == AddressingMode.ZERO_PAGE_X

    def test_lowercase_hex(self):
        """Test lowercase hexadecimal opcode bytes."""
        assert parse_line("Absolute|JMP|4c|3").opcode == 0x4C

    def test_single_digit_hex(self):
        """Test a single hex digit opcode byte."""
        assert parse_line("Implied|BRK|0|1").opcode == 0x00

    @pytest.mark.parametrize("label,mode,length", [
        ("Absolute", AddressingMode.ABSOLUTE, 3),
        ("Absolute,X", AddressingMode.ABSOLUTE_X, 3),
        ("Absolute,Y", AddressingMode.ABSOLUTE_Y, 3),
        ("Accumulator", AddressingMode.ACCUMULATOR, 1),
        ("Immediate", AddressingMode.IMMEDIATE, 2),
        ("Implied", AddressingMode.IMPLIED, 1),
        ("Indirect", AddressingMode.INDIRECT, 3),
        ("Relative", AddressingMode.RELATIVE, 2),
        ("Zero Page", AddressingMode.ZERO_PAGE, 2),
        ("Zero Page,X", AddressingMode.ZERO_PAGE_X, 2),
        ("Zero Page,Y", AddressingMode.ZERO_PAGE_Y, 2),
        ("(Indirect),Y", AddressingMode.INDIRECT_PLUS_Y, 2),
        ("(Indirect,X)", AddressingMode.INDIRECT_X, 2),
        ("(Indirect,Y)", AddressingMode.INDIRECT_Y, 2),
    ])
    def test_all_mode_labels(self, label, mode, length):
        """Test that every addressing mode label is recognized."""
        record = parse_line(f"{label}|XXX|10|{length}")
        assert record.mode == mode

    def test_location_recorded(self):
        """Test that the source location is attached to the record."""
        record = parse_line("Implied|NOP|EA|1", line_number=7, filename="t.txt")

        assert record.location == SourceLocation("t.txt", 7, 1)

    def test_location_not_part_of_equality(self):
        """Test that records from different lines compare equal."""
        a = parse_line("Implied|NOP|EA|1", line_number=1)
        b = parse_line("Implied|NOP|EA|1", line_number=99)

        assert a == b

    def test_records_are_immutable(self):
        """Test that parsed records cannot be modified."""
        record = parse_line("Implied|NOP|EA|1")
        with pytest.raises(AttributeError):
            record.opcode = 0x00


# =============================================================================
# Line Parsing Errors
# =============================================================================

class TestParseLineErrors:
    """Tests for malformed table lines."""

    def test_too_few_fields(self):
        """Test a line with three fields."""
        with pytest.raises(TableSyntaxError) as exc_info:
            parse_line("Immediate|ADC|69", line_number=3, filename="t.txt")

        assert "expected 4 fields" in str(exc_info.value)
        assert "t.txt:3:1" in str(exc_info.value)

    def test_too_many_fields(self):
        """Test a line with five fields."""
        with pytest.raises(TableSyntaxError):
            parse_line("Immediate|ADC|69|2|extra")

    def test_invalid_hex(self):
        """Test an opcode field that is not hexadecimal."""
        with pytest.raises(InvalidOpcodeError) as exc_info:
            parse_line("Immediate|ADC|G9|2")

        assert exc_info.value.text == "G9"
        assert "invalid opcode byte 'G9'" in str(exc_info.value)

    def test_opcode_out_of_range(self):
        """Test an opcode with more than two hex digits."""
        with pytest.raises(InvalidOpcodeError):
            parse_line("Immediate|ADC|169|2")

    def test_opcode_error_column(self):
        """Test that the error caret points at the opcode field."""
        with pytest.raises(InvalidOpcodeError) as exc_info:
            parse_line("Immediate|ADC|ZZ|2")

        assert exc_info.value.location.column == 15

    def test_unknown_mode(self):
        """Test an unrecognized addressing mode label."""
        with pytest.raises(UnknownAddressingModeError) as exc_info:
            parse_line("Zero Pag|ADC|65|2")

        error = exc_info.value
        assert error.label == "Zero Pag"
        assert "unknown addressing mode 'Zero Pag'" in str(error)
        assert "Zero Page" in error.similar_labels
        assert "did you mean" in str(error)

    def test_unknown_mode_without_suggestion(self):
        """Test a label with no close match."""
        with pytest.raises(UnknownAddressingModeError) as exc_info:
            parse_line("Bogus Addressing|ADC|65|2")

        assert exc_info.value.similar_labels == []
        assert exc_info.value.hint is None

    def test_length_not_integer(self):
        """Test a non-numeric length."""
        with pytest.raises(TableSyntaxError) as exc_info:
            parse_line("Immediate|ADC|69|two")

        assert "invalid instruction length" in str(exc_info.value)

    def test_length_out_of_range(self):
        """Test a length outside 1-3."""
        with pytest.raises(TableSyntaxError):
            parse_line("Immediate|ADC|69|4")

    def test_length_inconsistent_with_mode(self):
        """Test an absolute-mode instruction declared as 2 bytes."""
        with pytest.raises(InconsistentLengthError) as exc_info:
            parse_line("Absolute|ADC|6D|2")

        error = exc_info.value
        assert error.expected == 3
        assert error.length == 2

    def test_mnemonic_too_long(self):
        """Test a mnemonic that does not fit the name table."""
        with pytest.raises(TableSyntaxError) as exc_info:
            parse_line("Implied|NOPE|EA|1")

        assert "invalid mnemonic" in str(exc_info.value)

    def test_empty_mnemonic(self):
        """Test an empty mnemonic field."""
        with pytest.raises(TableSyntaxError):
            parse_line("Implied||EA|1")

    def test_errors_share_base_class(self):
        """Test that all parse errors can be caught as TableError."""
        for line in ("x", "Implied|NOP|QQ|1", "Nowhere|NOP|EA|1", "Implied|NOP|EA|2"):
            with pytest.raises(TableError):
                parse_line(line)

    def test_error_shows_source_line(self):
        """Test that the offending line is quoted in the message."""
        with pytest.raises(TableError) as exc_info:
            parse_line("Immediate|ADC|69")

        assert "    Immediate|ADC|69" in str(exc_info.value)


# =============================================================================
# Table Parsing
# =============================================================================

class TestParseTable:
    """Tests for parsing whole tables."""

    def test_preserves_order(self):
        """Test that records come back in file order."""
        records = parse_table(
            "Implied|NOP|EA|1\n"
            "Immediate|ADC|69|2\n"
            "Implied|BRK|00|1\n"
        )

        assert [r.mnemonic for r in records] == ["NOP", "ADC", "BRK"]

    def test_skips_comments_and_blank_lines(self):
        """Test that comments and blank lines are ignored."""
        records = parse_table(
            "# 6502 table\n"
            "\n"
            "Implied|NOP|EA|1\n"
            "   # indented comment\n"
            "   \n"
            "Immediate|ADC|69|2\n"
        )

        assert len(records) == 2

    def test_error_line_number_counts_comments(self):
        """Test that reported line numbers match the file."""
        with pytest.raises(TableSyntaxError) as exc_info:
            parse_table("# header\n\nImplied|NOP|EA\n", filename="t.txt")

        assert exc_info.value.location.line == 3

    def test_duplicate_mnemonics_allowed(self):
        """Test that several lines may share a mnemonic."""
        records = parse_table(
            "Implied|NOP|EA|1\n"
            "Implied|NOP|1A|1\n"
            "Implied|NOP|3A|1\n"
        )

        assert len(records) == 3
        assert {r.opcode for r in records} == {0xEA, 0x1A, 0x3A}

    def test_empty_table(self):
        """Test that an empty table parses to no records."""
        assert parse_table("") == []

    def test_load_table_file(self, tmp_path):
        """Test loading a table from disk."""
        path = tmp_path / "custom.txt"
        path.write_text("Immediate|LDA|A9|2\n")

        records = load_table(path)

        assert records == [InstructionRecord(0xA9, "LDA", AddressingMode.IMMEDIATE, 2)]
        assert records[0].location.filename == "custom.txt"

    def test_load_file_with_bom(self, tmp_path):
        """Test that a UTF-8 byte order mark does not hide the first line."""
        path = tmp_path / "bom.txt"
        path.write_bytes("# header\nImmediate|LDA|A9|2\n".encode("utf-8-sig"))

        records = load_table(path)

        assert len(records) == 1
        assert records[0].location.line == 2

    def test_load_file_bom_before_record(self, tmp_path):
        """Test a byte order mark directly before a table line."""
        path = tmp_path / "bom.txt"
        path.write_bytes("Immediate|LDA|A9|2\n".encode("utf-8-sig"))

        assert load_table(path)[0].mode == AddressingMode.IMMEDIATE

    def test_load_invalid_utf8(self, tmp_path):
        """Test that undecodable bytes are reported with their line."""
        path = tmp_path / "t.txt"
        path.write_bytes(b"Immediate|ADC|69|2\nImplied|N\xffP|EA|1\n")

        with pytest.raises(TableSyntaxError) as exc_info:
            load_table(path)

        error = exc_info.value
        assert error.location == SourceLocation("t.txt", 2, 10)
        assert "invalid UTF-8 byte 0xFF" in str(error)

    def test_load_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_table(tmp_path / "missing.txt")


# =============================================================================
# Packaged Table
# =============================================================================

class TestDefaultTable:
    """Tests for the packaged 6502 opcode table."""

    def setup_method(self):
        self.records = load_default_table()

    def test_file_exists(self):
        """Test that the data file ships with the package."""
        assert DEFAULT_TABLE_PATH.is_file()

    def test_record_count(self):
        """Test that all 256 opcode bytes are described."""
        assert len(self.records) == 256

    def test_opcode_bytes_unique(self):
        """Test that no opcode byte is declared twice."""
        assert len({r.opcode for r in self.records}) == 256

    def test_documented_instructions(self):
        """Test a sample of documented instructions."""
        by_opcode = {r.opcode: r for r in self.records}

        assert by_opcode[0x69].mnemonic == "ADC"
        assert by_opcode[0x6D].mnemonic == "ADC"
        assert by_opcode[0x6D].mode == AddressingMode.ABSOLUTE
        assert by_opcode[0x7D].mode == AddressingMode.ABSOLUTE_X
        assert by_opcode[0x60].mnemonic == "RTS"
        assert by_opcode[0x70].mnemonic == "BVS"
        assert by_opcode[0x50].mnemonic == "BVC"
        assert by_opcode[0x90].mnemonic == "BCC"
        assert by_opcode[0x9D].mnemonic == "STA"
        assert by_opcode[0x5D].mnemonic == "EOR"
        assert by_opcode[0x31].mode == AddressingMode.INDIRECT_PLUS_Y
        assert by_opcode[0x6C].mode == AddressingMode.INDIRECT

    def test_undocumented_instructions(self):
        """Test that illegal opcodes are included."""
        mnemonics = {r.mnemonic for r in self.records}

        for name in ("KIL", "DOP", "TOP", "LAX", "SLO", "ISC", "XAA"):
            assert name in mnemonics
