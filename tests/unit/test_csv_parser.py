import csv
from collections.abc import Iterator

import pytest

from privacy_scan.parsers.csv_parser import CsvParser
from privacy_scan.parsers.exceptions import MalformedDocumentError


class TestCsvParser:
    def test_one_fragment_per_row_from_all_columns(self) -> None:
        raw = b"author,text,location\nalice,hello world,Paris\nbob,second row,\n"
        assert CsvParser().parse(raw) == ["alice hello world Paris", "bob second row"]

    def test_named_columns_only(self) -> None:
        raw = b"id,Caption,Bio\n1,at the beach,lives on Main Street\n"
        parser = CsvParser(text_columns=["caption", " BIO "])
        assert parser.parse(raw) == ["at the beach lives on Main Street"]

    def test_named_columns_absent_yield_nothing(self) -> None:
        assert CsvParser(text_columns=["caption"]).parse(b"id,url\n1,http://x\n") == []

    def test_quoted_cells_with_commas_and_newlines(self) -> None:
        raw = b'text,bio\n"hello, world","line one\nline two"\n'
        assert CsvParser().parse(raw) == ["hello, world line one\nline two"]

    def test_short_rows_are_allowed(self) -> None:
        assert CsvParser().parse(b"a,b,c\nonly one\n") == ["only one"]

    def test_blank_lines_and_blank_rows_skipped(self) -> None:
        raw = b"a,b\n\n , \nvalue,\n"
        assert CsvParser().parse(raw) == ["value"]

    def test_header_only_yields_nothing(self) -> None:
        assert CsvParser().parse(b"author,text\n") == []

    def test_leading_blank_lines_before_header(self) -> None:
        assert CsvParser().parse(b"\n , \nname,text\nx,hello\n") == ["x hello"]

    def test_empty_file_yields_nothing(self) -> None:
        assert CsvParser().parse(b"") == []


class TestMalformedCsv:
    def test_row_wider_than_header_fails_whole_file(self) -> None:
        raw = b"a,b\n1,2\n1,2,3\n"
        with pytest.raises(MalformedDocumentError, match="row 3 has 3 cells"):
            CsvParser().parse(raw)

    def test_bad_quoting_fails(self) -> None:
        with pytest.raises(MalformedDocumentError, match="invalid CSV"):
            CsvParser().parse(b'a,b\n"x"y,z\n')


class TestLargeCells:
    @pytest.fixture(autouse=True)
    def _stock_field_limit(self) -> Iterator[None]:
        previous = csv.field_size_limit(131072)
        yield
        csv.field_size_limit(previous)

    def test_cell_larger_than_stock_csv_limit(self) -> None:
        cell = "a" * 200_000
        assert CsvParser().parse(b"text\n" + cell.encode() + b"\n") == [cell]

    def test_limit_follows_configured_size(self) -> None:
        CsvParser(max_field_size=300_000)
        assert csv.field_size_limit() == 300_000

    def test_limit_is_never_lowered(self) -> None:
        CsvParser(max_field_size=1_000)
        assert csv.field_size_limit() == 131072

    def test_cell_past_configured_size_is_malformed(self) -> None:
        parser = CsvParser(max_field_size=150_000)
        with pytest.raises(MalformedDocumentError, match="field larger than field limit"):
            parser.parse(b"text\n" + b"a" * 200_000 + b"\n")
