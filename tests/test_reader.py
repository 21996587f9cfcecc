import pytest

from reservation_import.pipeline.errors import SpreadsheetReadError
from reservation_import.processing.reader import SheetRow, SpreadsheetReader


def test_rows_stream_in_order_with_worksheet_row_numbers(make_workbook):
    path = make_workbook([
        ["R1", "Jan", "pending", "2024-05-01", "2024-05-07"],
        ["R2", "Anna", "pending", "2024-05-02", "2024-05-08"],
    ])

    with SpreadsheetReader(path) as reader:
        sheets = list(reader.worksheets())
        assert [sheet.title for sheet in sheets] == ["Reservations"]
        rows = list(sheets[0].rows())

    assert [row.number for row in rows] == [1, 2, 3]
    assert rows[0].cell(1) == "reservation_id"
    assert rows[2].cell(1) == "R2"
    assert rows[2].cell(5) == "2024-05-08"


def test_every_worksheet_is_streamed(make_workbook):
    path = make_workbook(
        [["R1", "Jan", "pending", "2024-05-01", "2024-05-07"]],
        sheets={"Overflow": [["R2", "Anna", "pending", "2024-05-02", "2024-05-08"]]},
    )

    with SpreadsheetReader(path) as reader:
        titles = []
        ids = []
        for sheet in reader.worksheets():
            titles.append(sheet.title)
            ids.extend(row.cell(1) for row in sheet.rows())

    assert titles == ["Reservations", "Overflow"]
    assert ids == ["reservation_id", "R1", "reservation_id", "R2"]


def test_cell_past_the_end_is_none():
    row = SheetRow(number=2, values=("R1",))

    assert row.cell(1) == "R1"
    assert row.cell(5) is None
    assert row.cell(0) is None


def test_blank_rows_are_detected():
    assert SheetRow(number=4, values=(None, "  ", None)).is_blank
    assert not SheetRow(number=4, values=(None, "Jan", None)).is_blank


def test_corrupt_file_raises_read_error(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"this is not a zip archive")

    with pytest.raises(SpreadsheetReadError) as excinfo:
        with SpreadsheetReader(str(path)):
            pass

    assert excinfo.value.details["file_path"] == str(path)


def test_missing_file_raises_read_error(tmp_path):
    with pytest.raises(SpreadsheetReadError):
        SpreadsheetReader(str(tmp_path / "nope.xlsx")).open()


def _valid_rows(count):
    return [[f"R{i}", f"Guest {i}", "pending", "2024-05-01", "2024-05-03"] for i in range(1, count + 1)]


def _read_all(path):
    with SpreadsheetReader(path) as reader:
        for sheet in reader.worksheets():
            for _row in sheet.rows():
                pass


def test_corrupt_sheet_data_raises_read_error(make_workbook, corrupt_workbook):
    path = corrupt_workbook(make_workbook(_valid_rows(300)))

    with pytest.raises(SpreadsheetReadError):
        _read_all(path)


def test_truncated_workbook_raises_read_error(make_workbook, truncate_workbook):
    path = truncate_workbook(make_workbook(_valid_rows(300)))

    with pytest.raises(SpreadsheetReadError):
        _read_all(path)
