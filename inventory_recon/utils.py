import json
import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

_REPORT_DATE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})$")


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def find_latest_report(directory: Path, prefix: str) -> tuple[Path, date] | None:
    """
    Finds the most recent report named <prefix><YYYY-MM-DD>.<ext> in a directory.
    Files whose name does not end in a valid date are ignored.
    """
    if not directory.is_dir():
        return None

    candidates = []
    for path in directory.glob(f"{prefix}*"):
        if not path.is_file():
            continue
        match = _REPORT_DATE_RE.search(path.stem[len(prefix):])
        if not match:
            continue
        try:
            report_date = datetime.strptime(match.group(1), "%Y-%m-%d").date()
        except ValueError:
            continue
        candidates.append((report_date, path.name, path))

    if not candidates:
        return None

    report_date, _, path = max(candidates)
    return path, report_date


def load_csv(file_path: Path, skiprows: int = 0) -> pd.DataFrame | None:
    """
    A CSV loader with an encoding fallback.
    It will attempt to read a file in the following order:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, which reads any byte but may misinterpret characters.
    Every column is read as text so SKUs like '1001' keep their exact form.
    """
    try:
        return pd.read_csv(file_path, encoding="utf-8-sig", skiprows=skiprows, dtype=str)

    except UnicodeDecodeError:
        logger.info(
            f"INFO: UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        try:
            return pd.read_csv(file_path, encoding="latin-1", skiprows=skiprows, dtype=str)
        except (OSError, ValueError) as e_latin1:
            logger.error(
                f"ERROR: Could not read {file_path.name} even with latin-1. Reason: {e_latin1}"
            )
            return None

    except FileNotFoundError:
        logger.info(f"INFO: Report not found at {file_path}, skipping.")
        return None

    except (OSError, ValueError) as e_general:
        # pandas raises EmptyDataError/ParserError, both ValueError subclasses
        logger.error(
            f"ERROR: An unexpected error occurred while reading {file_path.name}. Reason: {e_general}"
        )
        return None


def load_json(file_path: Path) -> Any | None:
    """Reads an API payload dump. Returns None when the file is missing or not valid JSON."""
    try:
        with open(file_path, encoding="utf-8-sig") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.info(f"INFO: Payload not found at {file_path}, skipping.")
        return None
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"ERROR: {file_path.name} is not valid JSON. Reason: {e}")
        return None
