from __future__ import annotations

import io
from dataclasses import dataclass

import pandas as pd


class CsvDecodeError(ValueError):
    """Raised when an upload cannot be read as a UTF-8 CSV table."""


@dataclass(frozen=True)
class DecodedTable:
    header: list[str]
    rows: list[list[str]]


def decode_csv(content: bytes) -> DecodedTable:
    """Read CSV bytes keeping every cell as text.

    No type inference and no NaN markers: "NA" stays "NA" and empty cells are
    "". Short rows are padded with "" and extra trailing cells are dropped.
    """
    if not content or not content.strip():
        raise CsvDecodeError("File is empty")

    try:
        df = pd.read_csv(
            io.BytesIO(content),
            dtype=str,
            keep_default_na=False,
            index_col=False,
            encoding="utf-8-sig",  # tolerate a BOM
            skip_blank_lines=True,
        )
    except UnicodeDecodeError as e:
        raise CsvDecodeError("File is not valid UTF-8") from e
    except pd.errors.EmptyDataError as e:
        raise CsvDecodeError("File has no header row") from e
    except pd.errors.ParserError as e:
        raise CsvDecodeError(f"Could not parse CSV: {e}") from e

    df = df.fillna("")
    header = [str(c) for c in df.columns]
    rows = [list(r) for r in df.itertuples(index=False, name=None)]
    return DecodedTable(header=header, rows=rows)
