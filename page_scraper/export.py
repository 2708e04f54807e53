"""
JSON and CSV helpers for scraped records.
"""

import csv
import io
import json
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Union
from pydantic import BaseModel
from .models import CSVOptions, Row


def _plain(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump()
    if isinstance(data, (list, tuple)):
        return [_plain(item) for item in data]
    return data


def to_json(data: Any) -> str:
    """Pretty-print data as JSON with a 2-space indent."""
    return json.dumps(_plain(data), indent=2, ensure_ascii=False)


def _format_value(value: Any, preserve_nulls: bool) -> str:
    if value is None:
        return "null" if preserve_nulls else ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_csv(
    data: Union[Mapping[str, Any], Sequence[Mapping[str, Any]]],
    preserve_nulls: bool = False
) -> Optional[str]:
    """
    Render records as CSV with every header and value quoted.

    A single mapping is treated as a one-row dataset. Columns come from the
    first row; rows missing a column get a null cell.

    Returns:
        The CSV text without a trailing newline, or None if there are no rows
    """
    rows = _plain(data)
    if isinstance(rows, Mapping):
        rows = [rows]
    rows = list(rows)

    if not rows:
        return None

    headers = list(rows[0].keys())

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_format_value(row.get(h), preserve_nulls) for h in headers])

    # Every field is quoted, so the final "\n" can only be the row terminator
    return buf.getvalue()[:-1]


def export_to_json(data: Any, file_path: str) -> None:
    """Write data to a JSON file."""
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(to_json(data))
    print(f"Data exported to JSON file at: {file_path}")


def export_to_csv(
    data: Union[Mapping[str, Any], Sequence[Mapping[str, Any]]],
    file_path: str,
    options: Optional[CSVOptions] = None
) -> bool:
    """
    Write records to a UTF-8 CSV file.

    Returns False (and writes nothing) when there is no data.
    """
    options = options or CSVOptions()
    text = to_csv(data, preserve_nulls=options.preserve_nulls)

    if text is None:
        print("No data to export")
        return False

    with open(file_path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    print(f"Data exported to CSV file at: {file_path}")
    return True


_EXTRA_FIELDS = "__extra__"


def iter_csv(file_path: str) -> Iterator[Row]:
    """
    Stream rows from a CSV file whose first line is the header.

    Short rows are padded with empty strings; a row with more fields than
    the header raises csv.Error.
    """
    with open(file_path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f, restkey=_EXTRA_FIELDS, restval="")
        for row in reader:
            if _EXTRA_FIELDS in row:
                raise csv.Error(
                    f"line {reader.line_num}: expected {len(reader.fieldnames)} fields, "
                    f"got {len(reader.fieldnames) + len(row[_EXTRA_FIELDS])}"
                )
            yield dict(row)


def read_csv(file_path: str) -> List[Row]:
    """Read every row of a CSV file, in file order."""
    return list(iter_csv(file_path))
