"""
Top-level summary of the patient ledger and manual data

The ledger is normalised and sorted once,
then fed to both the daily and the region summary.
"Now" is captured once per call
so every day range in the result ends on the same day.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable
from typing import Any

import attr
from attrs import define, field

from covid_summary.assertions import (
    assert_daily_summary_is_consistent,
    assert_region_summary_is_sorted,
)
from covid_summary.cruise import CRUISE_START_DATE, DEFAULT_CRUISE_SHIPS, CruiseShip
from covid_summary.daily import DailySummaryVerifier, generate_daily_summary
from covid_summary.dates import JST_UTC_OFFSET_HOURS, get_today, to_date
from covid_summary.parsing import ensure_records, patients_to_frame
from covid_summary.policies import MissingPolicy, zero_means_missing
from covid_summary.region_names import PREFECTURES
from covid_summary.regions import REGION_START_DATE, generate_region_summary
from covid_summary.typing import (
    CruiseCountRow,
    ManualDailyRow,
    ManualRegionRow,
    PatientRecord,
)
from covid_summary.verification import verify_daily_summary

logger = logging.getLogger(__name__)

MAX_ABS_UTC_OFFSET_HOURS = 24


@define
class SummaryResult:
    """
    Result of summarising with [Summariser][(m).]
    """

    regions: list[dict[str, Any]]
    """
    Per-region summary, sorted by confirmed count (descending)
    """

    daily: list[dict[str, Any]]
    """
    Nationwide daily summary, in date order
    """

    updated: str
    """
    When the underlying data was last updated, passed through verbatim
    """

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to the JSON-ready mapping consumed downstream
        """
        return {"regions": self.regions, "daily": self.daily, "updated": self.updated}


@define
class Summariser:
    """
    Summariser of the patient ledger, manual spreadsheets and cruise counts
    """

    region_names: tuple[str, ...] = field(default=PREFECTURES, converter=tuple)
    """
    Canonical names of the real regions

    Every other region is flagged as a pseudo-region.
    """

    region_start_date: str = field(default=REGION_START_DATE)
    """
    First day of the regions' daily vectors (ISO date)
    """

    cruise_start_date: str = field(default=CRUISE_START_DATE)
    """
    First day of the cruise ships' daily vectors (ISO date)
    """

    utc_offset_hours: float = field(default=JST_UTC_OFFSET_HOURS)
    """
    Offset from UTC in which "today" is evaluated
    """

    cruise_ships: tuple[CruiseShip, ...] = field(
        default=DEFAULT_CRUISE_SHIPS, converter=tuple
    )
    """
    Cruise ships to include
    """

    verify: DailySummaryVerifier | None = verify_daily_summary
    """
    Post-processing step applied to the daily summary

    Set to `None` to skip it.
    """

    is_missing: MissingPolicy = zero_means_missing
    """
    Policy deciding which daily cumulative values are carried forward over
    """

    run_checks: bool = True
    """
    If `True`, check the output's invariants before returning it

    If you are sure about your workflow,
    you can disable the checks to speed things up.
    """

    @region_start_date.validator
    @cruise_start_date.validator
    def validate_start_date(self, attribute: attr.Attribute[Any], value: str) -> None:
        """
        Validate that a start date is an ISO date

        Raises
        ------
        ValueError
            `value` is not an ISO date
        """
        to_date(value)

    @utc_offset_hours.validator
    def validate_utc_offset_hours(
        self, attribute: attr.Attribute[Any], value: float
    ) -> None:
        """
        Validate the UTC offset

        Raises
        ------
        ValueError
            The offset is not strictly between -24 and 24 hours
        """
        if abs(value) >= MAX_ABS_UTC_OFFSET_HOURS:
            msg = f"utc_offset_hours must be between -24 and 24. Received {value}"
            raise ValueError(msg)

    def __call__(  # noqa: PLR0913
        self,
        patients: Iterable[PatientRecord],
        manual_daily_rows: Iterable[ManualDailyRow] | None,
        manual_region_rows: Iterable[ManualRegionRow] | None,
        cruise_rows: Iterable[CruiseCountRow] | None,
        last_updated: str,
        now: dt.datetime | None = None,
    ) -> SummaryResult:
        """
        Summarise

        Parameters
        ----------
        patients
            Patient ledger

        manual_daily_rows
            Rows of the manual daily spreadsheet

        manual_region_rows
            Rows of the manual per-region spreadsheet

        cruise_rows
            Cruise-ship cumulative counts.
            If `None`, cruise data is left out of both summaries.

        last_updated
            When the underlying data was last updated

        now
            Current time.
            If not supplied, the wall clock is read (once).

        Returns
        -------
        :
            Region and daily summaries
        """
        today = get_today(utc_offset_hours=self.utc_offset_hours, now=now)
        patients_df = patients_to_frame(patients)
        if cruise_rows is not None:
            # Read once, used by both summaries
            cruise_rows = ensure_records(cruise_rows, name="cruise_rows")

        logger.info(
            "Summarising %d patients up to %s", len(patients_df), today.isoformat()
        )

        regions = generate_region_summary(
            patients_df,
            manual_region_rows,
            cruise_rows,
            today=today,
            region_names=self.region_names,
            start_date=self.region_start_date,
            cruise_start_date=self.cruise_start_date,
            ships=self.cruise_ships,
        )
        daily = generate_daily_summary(
            patients_df,
            manual_daily_rows,
            cruise_rows,
            ships=self.cruise_ships,
            is_missing=self.is_missing,
            verify=self.verify,
        )

        if self.run_checks:
            assert_daily_summary_is_consistent(daily)
            assert_region_summary_is_sorted(regions)

        return SummaryResult(regions=regions, daily=daily, updated=last_updated)


def summarise(  # noqa: PLR0913
    patients: Iterable[PatientRecord],
    manual_daily_rows: Iterable[ManualDailyRow] | None,
    manual_region_rows: Iterable[ManualRegionRow] | None,
    cruise_rows: Iterable[CruiseCountRow] | None,
    last_updated: str,
    now: dt.datetime | None = None,
) -> dict[str, Any]:
    """
    Summarise with the default [Summariser][(m).]

    Parameters
    ----------
    patients
        Patient ledger

    manual_daily_rows
        Rows of the manual daily spreadsheet

    manual_region_rows
        Rows of the manual per-region spreadsheet

    cruise_rows
        Cruise-ship cumulative counts, or `None`

    last_updated
        When the underlying data was last updated

    now
        Current time.
        If not supplied, the wall clock is read (once).

    Returns
    -------
    :
        `{"regions": ..., "daily": ..., "updated": ...}`
    """
    return Summariser()(
        patients,
        manual_daily_rows,
        manual_region_rows,
        cruise_rows,
        last_updated=last_updated,
        now=now,
    ).to_dict()
