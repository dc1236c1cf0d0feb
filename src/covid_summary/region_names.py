"""
Canonical list of real regions

Anything not in this list is a pseudo-region
(e.g. an unspecified bucket, a port of entry or a cruise ship).
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

PREFECTURES: tuple[str, ...] = (
    "Hokkaido",
    "Aomori",
    "Iwate",
    "Miyagi",
    "Akita",
    "Yamagata",
    "Fukushima",
    "Ibaraki",
    "Tochigi",
    "Gunma",
    "Saitama",
    "Chiba",
    "Tokyo",
    "Kanagawa",
    "Niigata",
    "Toyama",
    "Ishikawa",
    "Fukui",
    "Yamanashi",
    "Nagano",
    "Gifu",
    "Shizuoka",
    "Aichi",
    "Mie",
    "Shiga",
    "Kyoto",
    "Osaka",
    "Hyogo",
    "Nara",
    "Wakayama",
    "Tottori",
    "Shimane",
    "Okayama",
    "Hiroshima",
    "Yamaguchi",
    "Tokushima",
    "Kagawa",
    "Ehime",
    "Kochi",
    "Fukuoka",
    "Saga",
    "Nagasaki",
    "Kumamoto",
    "Oita",
    "Miyazaki",
    "Kagoshima",
    "Okinawa",
)
"""
English names of Japan's 47 prefectures
"""


def load_region_names(path: Path | str, column: str = "prefecture_en") -> tuple[str, ...]:
    """
    Load the canonical region names from a CSV file

    Parameters
    ----------
    path
        CSV file with a header row

    column
        Column holding the region display names

    Returns
    -------
    :
        Region names, in file order, with blank rows dropped

    Raises
    ------
    KeyError
        `column` is not in the file
    """
    names = pd.read_csv(path, dtype=str)[column].dropna().str.strip()

    return tuple(n for n in names if n)
