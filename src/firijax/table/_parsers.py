"""Parser for the published FIRI-2018 CSV table.

The CSV is a transposed spreadsheet: the first column holds row labels and
every following column is one stored profile.  A block of labelled rows
(``Code``, ``Month``, ``DOY``, ``Chi, deg``, ``Lat, deg``, ``F10_7``) gives
the model parameters of each profile, and the rows after it hold the
electron density [m^-3] at the altitude [km] given in the first column.
The last rows of the file are incomplete and are skipped.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import polars as pl

from firijax.constants import MIN_ALTITUDE

logger = logging.getLogger(__name__)

_HEADER_LABELS: dict[str, str] = {
    "code": "code",
    "month": "month",
    "doy": "doy",
    "chi": "chi",
    "lat": "lat",
    "f10_7": "f10_7",
    "f10.7": "f10_7",
}
"""Maps normalized row labels to header fields."""

_REQUIRED_FIELDS: tuple[str, ...] = ("month", "chi", "lat", "f10_7")


def _normalize_label(label: str | None) -> str:
    """Reduce a row label such as ``"Chi, deg"`` to its key (``"chi"``).

    Args:
        label: Raw first-column cell, possibly ``None``.

    Returns:
        Lowercase label with any unit suffix removed.
    """
    if label is None:
        return ""
    return label.split(",")[0].strip().lower()


def _parse_header_row(cells: list[str | None], field: str) -> list:
    """Convert the profile cells of one header row.

    Raises:
        ValueError: If a numeric cell is blank or not a number.
    """
    if field == "code":
        return ["" if c is None else c.strip() for c in cells]

    parsed = []
    for i, cell in enumerate(cells):
        try:
            value = float(cell)  # type: ignore[arg-type]
        except (TypeError, ValueError) as err:
            raise ValueError(f"Invalid {field} value {cell!r} in profile column {i + 1}") from err
        parsed.append(int(value) if field in ("month", "doy") else value)
    return parsed


def parse_firi_csv(
    filepath: str | Path,
    *,
    min_altitude: float = MIN_ALTITUDE,
) -> dict[str, object]:
    """Parse a FIRI CSV file into arrays ready for :func:`table_from_arrays`.

    Args:
        filepath: Path to a FIRI CSV file (e.g. ``firi2018.csv``).
        min_altitude: Rows below this altitude [m] are dropped. Defaults to
            the stated 60 km lower limit of FIRI-2018.

    Returns:
        Dictionary with keys ``code``, ``month``, ``chi``, ``lat``,
        ``f10_7``, ``data``, ``altitude`` and, when the file carries it,
        ``doy``.  Altitudes are in metres.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a required header row is missing or no complete
            altitude rows are found.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"FIRI table not found: {filepath}")

    logger.info("Loading FIRI table from %s", filepath)
    df = pl.read_csv(filepath, has_header=False, infer_schema=False)
    first = df.columns[0]
    profile_columns = df.columns[1:]

    header_rows: dict[str, int] = {}
    for i, label in enumerate(df.get_column(first).to_list()):
        field = _HEADER_LABELS.get(_normalize_label(label))
        if field is not None and field not in header_rows:
            header_rows[field] = i

    missing = [f for f in _REQUIRED_FIELDS if f not in header_rows]
    if missing:
        raise ValueError(f"FIRI table {filepath} is missing header rows: {missing}")

    # Trailing columns without a profile are artefacts of the spreadsheet export
    month_row = df.row(header_rows["month"])
    profile_columns = [c for c, v in zip(profile_columns, month_row[1:]) if v not in (None, "")]

    parsed: dict[str, object] = {}
    for field, row in header_rows.items():
        cells = list(df.select(profile_columns).row(row))
        parsed[field] = _parse_header_row(cells, field)

    body = (
        df.slice(max(header_rows.values()) + 1)
        .select([first, *profile_columns])
        .select(pl.all().str.strip_chars().cast(pl.Float64, strict=False))
        .drop_nulls()
    )
    if body.height == 0:
        raise ValueError(f"No complete altitude rows found in FIRI table {filepath}")

    altitude = body.get_column(first).to_numpy() * 1000.0
    keep = altitude >= min_altitude
    data = body.select(profile_columns).to_numpy()[keep]

    parsed["altitude"] = altitude[keep]
    parsed["data"] = np.ascontiguousarray(data)

    logger.info(
        "Loaded %d profiles at %d altitudes",
        len(profile_columns),
        int(keep.sum()),
    )
    return parsed
