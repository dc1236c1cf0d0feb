"""
Policies for deciding when a cumulative value is missing

The manual spreadsheets have no way of saying "not reported".
A blank cell parses to zero,
so we currently read a zero as "no override for this date"
and carry the previous day's value forward.
This conflates a true zero with missing data.
The policy is kept behind [zero_means_missing][(m).]
so it can be swapped for an explicit present/absent flag
without touching the rest of the pipeline.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Callable

import pandas as pd

MissingPolicy = Callable[[pd.Series], pd.Series]
"""
Callable which returns a mask of the values that should be treated as missing
"""


def zero_means_missing(values: pd.Series) -> pd.Series:
    """
    Treat every zero as a missing value

    Parameters
    ----------
    values
        Cumulative values, in date order

    Returns
    -------
    :
        Mask which is `True` where `values` is zero
    """
    return values == 0


def forward_fill_cumulative(
    indf: pd.DataFrame,
    columns: Iterable[str],
    is_missing: MissingPolicy = zero_means_missing,
) -> pd.DataFrame:
    """
    Carry the last known cumulative value forward over missing values

    The first row is never treated as missing,
    it is always left as is.

    Running this on an already filled frame does not change it.

    Parameters
    ----------
    indf
        Data to fill, sorted by date

    columns
        Columns to fill

    is_missing
        Policy which decides which values are missing

    Returns
    -------
    :
        Copy of `indf` with `columns` filled
    """
    res = indf.copy()
    if res.empty:
        return res

    for column in columns:
        missing = is_missing(res[column]).to_numpy(copy=True)
        missing[0] = False
        res[column] = (
            res[column].mask(missing).ffill().astype(res[column].dtype)
        )

    return res
