from __future__ import annotations

import json
from pathlib import Path

import pytest

from sample_rows import HEADER, ROW_1
from throughput_records.dataset.reader import (
    DatasetLoadError,
    invalid_numeric_columns,
    load_dataset,
    parse_input_line,
)
from throughput_records.logging.error_log import ErrorLogBuffer
from throughput_records.models.record import RecordInputError


def test_load_fixture_with_quoted_comma(sample_csv: Path):
    records = load_dataset(sample_csv)
    assert len(records) == 3
    assert records[1].key_point == "Key Point, Extra"
    assert records[0].company == "Company A"
    assert records[2].company == "Company C"


def test_load_coerces_types(sample_csv: Path):
    first, second, third = load_dataset(sample_csv)
    assert first.month == 1 and first.year == 2024
    assert first.latitude == pytest.approx(48.123)
    assert second.throughput == 0.0
    assert second.reason_for_variance == ""
    assert third.throughput == pytest.approx(12.5)


def test_load_unescapes_doubled_quotes(sample_csv: Path):
    records = load_dataset(sample_csv)
    assert records[2].product == 'light "sweet" crude'


def test_load_missing_file_is_distinct_failure(temp_workdir: Path):
    with pytest.raises(DatasetLoadError):
        load_dataset(temp_workdir / "data" / "does_not_exist.csv")


def test_load_directory_is_failure(temp_workdir: Path):
    with pytest.raises(DatasetLoadError):
        load_dataset(temp_workdir / "data")


def test_load_header_only_is_empty_dataset(temp_workdir: Path):
    path = temp_workdir / "data" / "header_only.csv"
    path.write_text(HEADER + "\n", encoding="utf-8")
    assert load_dataset(path) == []


def test_load_empty_file_is_empty_dataset(temp_workdir: Path):
    path = temp_workdir / "data" / "empty.csv"
    path.write_text("", encoding="utf-8")
    assert load_dataset(path) == []


def test_header_is_not_validated(temp_workdir: Path):
    path = temp_workdir / "data" / "odd_header.csv"
    path.write_text("whatever\n" + ROW_1 + "\n", encoding="utf-8")
    records = load_dataset(path)
    assert len(records) == 1
    assert records[0].company == "Company A"


def test_blank_lines_are_skipped(temp_workdir: Path):
    path = temp_workdir / "data" / "blanks.csv"
    path.write_text(HEADER + "\n\n" + ROW_1 + "\n\n" + ROW_1 + "\n", encoding="utf-8")
    assert len(load_dataset(path)) == 2


def test_short_row_is_padded(temp_workdir: Path):
    path = temp_workdir / "data" / "short.csv"
    path.write_text(HEADER + "\n" + "2024-05-01,5,2024,Company D\n" + ROW_1 + "\n", encoding="utf-8")
    records = load_dataset(path)
    assert len(records) == 2
    short = records[0]
    assert short.company == "Company D"
    assert short.pipeline == ""
    assert short.throughput == 0.0
    assert short.reason_for_variance == ""


def test_invalid_numbers_recorded_in_error_log(temp_workdir: Path):
    path = temp_workdir / "data" / "bad_numbers.csv"
    bad = ROW_1.replace(",100,50,50,", ",lots,50,50,")
    path.write_text(HEADER + "\n" + bad + "\n", encoding="utf-8")
    buf = ErrorLogBuffer(temp_workdir / "logs")
    records = load_dataset(path, error_log=buf)
    assert len(records) == 1
    assert records[0].throughput == 0.0
    assert len(buf) == 1
    log_path = buf.flush()
    assert log_path is not None
    entry = json.loads(log_path.read_text(encoding="utf-8").strip())
    assert entry["error_type"] == "INVALID_NUMBER"
    assert entry["row"] == 1
    assert "Throughput (1000 m3/d)" in entry["message"]


def test_invalid_numeric_columns():
    fields = ROW_1.split(",")
    assert invalid_numeric_columns(fields) == []
    fields[1] = "January"
    fields[11] = "nan"
    fields[12] = ""
    assert invalid_numeric_columns(fields) == ["Month", "Throughput (1000 m3/d)"]


def test_parse_input_line_quote_aware():
    fields = parse_input_line('a, "b,c", "say ""hi"""')
    assert fields == ["a", "b,c", 'say "hi"']


def test_parse_input_line_counts_fields():
    assert len(parse_input_line("a,b")) == 2
    assert len(parse_input_line(ROW_1)) == 17


def test_parse_input_line_keeps_empty_fields():
    assert parse_input_line("a,,c,") == ["a", "", "c", ""]


@pytest.mark.parametrize("text", ["", "   "])
def test_parse_input_line_rejects_empty(text: str):
    with pytest.raises(RecordInputError):
        parse_input_line(text)


def test_fields_past_seventeenth_are_ignored(temp_workdir: Path):
    path = temp_workdir / "data" / "long.csv"
    path.write_text(HEADER + "\n" + ROW_1 + ",surplus,more\n" + ROW_1 + "\n", encoding="utf-8")
    records = load_dataset(path)
    assert len(records) == 2
    assert records[0].reason_for_variance == "No variance"
    assert records[0] == records[1]


def test_long_row_recorded_with_its_row_number(temp_workdir: Path):
    path = temp_workdir / "data" / "long_rows.csv"
    path.write_text(HEADER + "\n" + ROW_1 + "\n" + ROW_1 + ",surplus\n", encoding="utf-8")
    buf = ErrorLogBuffer(temp_workdir / "logs")
    records = load_dataset(path, error_log=buf)
    assert len(records) == 2
    assert records[1].reason_for_variance == "No variance"
    assert len(buf) == 1
    entry = json.loads(buf.flush().read_text(encoding="utf-8").strip())
    assert entry["error_type"] == "EXTRA_FIELDS_IGNORED"
    assert entry["row"] == 2


def test_trailing_empty_extra_field_still_counts(temp_workdir: Path):
    path = temp_workdir / "data" / "trailing.csv"
    path.write_text(HEADER + "\n" + ROW_1 + ",\n", encoding="utf-8")
    buf = ErrorLogBuffer(temp_workdir / "logs")
    assert len(load_dataset(path, error_log=buf)) == 1
    assert len(buf) == 1


def test_rows_of_seventeen_fields_record_no_issue(sample_csv: Path, temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs")
    assert len(load_dataset(sample_csv, error_log=buf)) == 3
    assert len(buf) == 0
