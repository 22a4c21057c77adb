import logging
import math
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

import pandas as pd

from .models import Crate
from .units import normalize_unit

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["label", "length", "width", "height", "weight"]

OPTIONAL_COLUMNS = ["id", "unit", "stack_on", "stackable", "color"]

COLUMN_ALIASES = {
    "name": "label",
    "stack on": "stack_on",
    "stack_target_id": "stack_on",
    "stacktargetid": "stack_on",
    "colour": "color",
}

TRUTHY = {"1", "true", "yes", "y", "x"}


@dataclass
class ImportResult:
    crates: List[Crate] = field(default_factory=list)
    rejected: List[Tuple[int, str]] = field(default_factory=list)  # (row number, reason)
    total_rows: int = 0


def read_sheet(path, sheet_name=0):
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    if suffix in (".xlsx", ".xls"):
        try:
            return pd.read_excel(path, sheet_name=sheet_name, dtype=str)
        except zipfile.BadZipFile as e:
            raise ValueError(f"Could not read {path.name}: {e}") from e
    raise ValueError(f"Unsupported file type {suffix!r}. Only CSV and Excel supported.")


def load_crates(path, unit="m", start_id=1, sheet_name=0):
    df = read_sheet(path, sheet_name=sheet_name)
    logger.info("read %d row(s) from %s", len(df), path)
    return parse_frame(df, unit=unit, start_id=start_id)


def parse_frame(df, unit="m", start_id=1):
    """Map spreadsheet rows to crates, skipping rows that cannot be used.

    Column names are matched case-insensitively. A row is rejected when its
    label is empty, one of the numeric columns does not hold a finite number,
    or its id repeats an earlier row. Rows without an id get the next free
    number from start_id that no row of the sheet uses.
    """
    column_map = _normalize_columns(df.columns)
    missing = [col for col in REQUIRED_COLUMNS if col not in column_map.values()]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")
    df = df.rename(columns=column_map)
    allowed = set(REQUIRED_COLUMNS + OPTIONAL_COLUMNS)
    df = df[[col for col in df.columns if col in allowed]]

    default_unit = normalize_unit(unit)
    records = df.to_dict(orient="records")
    result = ImportResult(total_rows=len(records))
    # generated ids must not collide with any id written in the sheet
    explicit = {_clean_id(row.get("id")) for row in records} - {None}
    seen = set()
    next_id = start_id
    # header is row 1 in the sheet, data starts at row 2
    for row_no, row in enumerate(records, start=2):
        fallback_id = None
        if _clean_id(row.get("id")) is None:
            while next_id in explicit or next_id in seen:
                next_id += 1
            fallback_id = next_id
        crate, reason = _parse_row(row, default_unit, fallback_id)
        if crate is not None and crate.id in seen:
            crate, reason = None, f"duplicate id: {crate.id!r}"
        if crate is None:
            logger.warning("row %d skipped: %s", row_no, reason)
            result.rejected.append((row_no, reason))
            continue
        if fallback_id is not None:
            next_id += 1
        seen.add(crate.id)
        result.crates.append(crate)
    return result


def _parse_row(row, default_unit, fallback_id):
    label = _clean_value(row.get("label"))
    if not label:
        return None, "missing label"

    numbers = {}
    for col in ("length", "width", "height", "weight"):
        raw = _clean_value(row.get(col))
        try:
            value = float(raw)
        except ValueError:
            return None, f"non-numeric {col}: {raw!r}"
        if not math.isfinite(value):
            return None, f"non-numeric {col}: {raw!r}"
        numbers[col] = value

    row_unit = _clean_value(row.get("unit"))
    try:
        unit = normalize_unit(row_unit) if row_unit else default_unit
    except ValueError as e:
        return None, str(e)

    crate_id = _clean_id(row.get("id"))
    crate = Crate(
        id=fallback_id if crate_id is None else crate_id,
        label=label,
        length=numbers["length"], width=numbers["width"], height=numbers["height"],
        weight=numbers["weight"],
        length_unit=unit, width_unit=unit, height_unit=unit,
        stackable=_clean_value(row.get("stackable")).lower() in TRUTHY,
        stack_target_id=_clean_id(row.get("stack_on")),
        color=_clean_value(row.get("color")) or None,
    )
    return crate, None


def _normalize_columns(columns):
    mapped = {}
    for col in columns:
        key = str(col).strip().lower()
        mapped[col] = COLUMN_ALIASES.get(key, key)
    return mapped


def _clean_value(value):
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def _clean_id(value):
    text = _clean_value(value)
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return text
    if math.isfinite(number) and number.is_integer():
        return int(number)
    return text
