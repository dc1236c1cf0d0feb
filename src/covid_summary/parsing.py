"""
Lenient parsing of spreadsheet cells and normalisation of the patient ledger

Manual spreadsheets routinely contain blank cells,
so nothing in here raises because of a single bad value.
The only thing we refuse is input that is not a sequence of records at all.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np
import pandas as pd

from covid_summary.exceptions import InputContractError
from covid_summary.typing import PatientRecord

LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")
"""
Pattern for the integer at the start of a cell, e.g. `"12"` in `"12 (approx.)"`
"""

DECEASED_STATUS = "Deceased"
"""
Value of `patientStatus` for patients who have died
"""

PATIENT_COLUMNS: dict[str, str] = {
    "dateAnnounced": "date_announced",
    "detectedPrefecture": "region",
    "detectedCityTown": "city",
    "patientStatus": "status",
    "confirmedPatient": "confirmed",
    "deceasedDate": "deceased_date",
    "knownCluster": "known_cluster",
}
"""
Map from ledger keys to the columns of the normalised patient frame
"""


def is_present(value: Any) -> bool:
    """
    Check whether a cell holds a value

    `None`, NaN, pandas' missing markers and blank strings
    are all treated as an empty cell.

    Parameters
    ----------
    value
        Cell to check

    Returns
    -------
    :
        `True` if the cell holds something
    """
    if value is None or value is pd.NA or value is pd.NaT:
        return False

    if isinstance(value, str):
        return bool(value.strip())

    if isinstance(value, (float, np.floating)) and math.isnan(value):
        return False

    return True


def safe_parse_int(value: Any) -> int:
    """
    Parse an integer out of a cell, falling back to zero

    Strings are parsed from their leading integer,
    so `"12"` and `"12.7"` both give `12`
    and `"-3"` gives `-3`.
    Anything that cannot be parsed gives `0`.

    Parameters
    ----------
    value
        Cell to parse

    Returns
    -------
    :
        Parsed integer

    Examples
    --------
    >>> safe_parse_int("12")
    12
    >>> safe_parse_int("")
    0
    >>> safe_parse_int("abc")
    0
    >>> safe_parse_int(None)
    0
    """
    if not is_present(value) or isinstance(value, (bool, np.bool_)):
        return 0

    if isinstance(value, (int, np.integer)):
        return int(value)

    if isinstance(value, (float, np.floating)):
        if math.isinf(value):
            return 0

        return int(value)

    match = LEADING_INTEGER.match(str(value))
    if match is None:
        return 0

    return int(match.group(1))


def _optional_str(value: Any) -> str | None:
    if not is_present(value):
        return None

    return str(value)


def ensure_records(
    rows: Any, name: str, allow_none: bool = False
) -> list[Mapping[str, Any]]:
    """
    Ensure that `rows` is a sequence of records

    Parameters
    ----------
    rows
        Input to check.
        A [pd.DataFrame][pandas.DataFrame] is converted to its records.

    name
        Name of the input (only used for the error message)

    allow_none
        If `True`, `None` is treated as an empty sequence

    Returns
    -------
    :
        `rows` as a list of mappings, in their original order

    Raises
    ------
    InputContractError
        `rows` is not an enumerable sequence of mappings
    """
    if rows is None and allow_none:
        return []

    if isinstance(rows, pd.DataFrame):
        return rows.to_dict(orient="records")

    if (
        rows is None
        or isinstance(rows, (str, bytes, Mapping))
        or not isinstance(rows, Iterable)
    ):
        raise InputContractError(
            name=name, expected="a sequence of records", received=rows
        )

    res = list(rows)
    not_mappings = [r for r in res if not isinstance(r, Mapping)]
    if not_mappings:
        raise InputContractError(
            name=name,
            expected="a sequence of records (mappings)",
            received=not_mappings[0],
        )

    return res


def patients_to_frame(patients: Iterable[PatientRecord]) -> pd.DataFrame:
    """
    Normalise the patient ledger into a frame, sorted by announcement date

    Blank cells become `None`.
    A missing region becomes the empty string
    so that it still forms its own (pseudo-)region bucket.
    Patients without an announcement date sort last.

    `confirmedPatient` is read by truthiness,
    so any non-blank string (including `"FALSE"`) counts as confirmed.
    Pass booleans if the source sheet holds text flags.

    Parameters
    ----------
    patients
        Patient ledger

    Returns
    -------
    :
        Frame with the columns given by the values of [PATIENT_COLUMNS][(m).]

    Raises
    ------
    InputContractError
        `patients` is not a sequence of records
    """
    records = ensure_records(patients, name="patients")

    normalised = [
        {
            "date_announced": _optional_str(r.get("dateAnnounced")),
            "region": _optional_str(r.get("detectedPrefecture")) or "",
            "city": _optional_str(r.get("detectedCityTown")),
            "status": _optional_str(r.get("patientStatus")),
            "confirmed": is_present(r.get("confirmedPatient"))
            and bool(r.get("confirmedPatient")),
            "deceased_date": _optional_str(r.get("deceasedDate")),
            "known_cluster": _optional_str(r.get("knownCluster")),
        }
        for r in records
    ]

    res = pd.DataFrame(normalised, columns=list(PATIENT_COLUMNS.values()))
    res["confirmed"] = res["confirmed"].astype(bool)
    res = res.sort_values(
        "date_announced", kind="stable", na_position="last"
    ).reset_index(drop=True)

    return res


def as_patient_frame(patients: Any) -> pd.DataFrame:
    """
    Get the normalised patient frame, normalising only if needed

    Parameters
    ----------
    patients
        Either the output of [patients_to_frame][(m).] or a patient ledger

    Returns
    -------
    :
        Normalised patient frame
    """
    if isinstance(patients, pd.DataFrame) and set(PATIENT_COLUMNS.values()).issubset(
        patients.columns
    ):
        return patients

    return patients_to_frame(patients)


def is_deceased(patients: pd.DataFrame) -> pd.Series[bool]:  # type: ignore # pandas-stubs not up to date
    """
    Get a mask of the patients whose status is deceased

    Parameters
    ----------
    patients
        Normalised patient frame (see [patients_to_frame][(m).])

    Returns
    -------
    :
        Mask, aligned with `patients`
    """
    return patients["status"] == DECEASED_STATUS
