"""
The per-region summary record
"""

from __future__ import annotations

from typing import Any

from attrs import define, field


@define
class RegionSummary:
    """
    Summary of a single region (or pseudo-region)

    This is the permanent output record.
    Working state used while aggregating (e.g. the region's patients)
    is never stored on it.
    """

    name: str
    """
    Display name of the region, also its key
    """

    confirmed: int = 0
    """
    Total confirmed patients
    """

    deceased: int = 0
    """
    Total deceased patients
    """

    recovered: int = 0
    """
    Total recovered patients (from the manual spreadsheet)
    """

    critical: int = 0
    """
    Patients in a critical condition
    """

    tested: int = 0
    """
    Total tests carried out
    """

    cruise_passenger: int = 0
    """
    Confirmed patients who disembarked from a cruise ship
    """

    confirmed_by_city: dict[str, int] = field(factory=dict)
    """
    Confirmed patients per city/town, in the order the cities were first seen
    """

    daily_confirmed_count: list[int] = field(factory=list)
    """
    Confirmed patients per day, index 0 being `daily_confirmed_start_date`
    """

    daily_confirmed_start_date: str | None = None
    """
    ISO date of the first entry of `daily_confirmed_count`
    """

    newly_confirmed: int = 0
    """
    Last entry of `daily_confirmed_count`
    """

    yesterday_confirmed: int = 0
    """
    Second to last entry of `daily_confirmed_count`
    """

    daily_deceased_count: list[int] = field(factory=list)
    """
    Deceased patients per day, index 0 being `daily_deceased_start_date`
    """

    daily_deceased_start_date: str | None = None
    """
    ISO date of the first entry of `daily_deceased_count`
    """

    newly_deceased: int = 0
    """
    Last entry of `daily_deceased_count`
    """

    yesterday_deceased: int = 0
    """
    Second to last entry of `daily_deceased_count`
    """

    name_ja: str | None = None
    """
    Localized (Japanese) name, if known
    """

    pseudo_prefecture: bool = False
    """
    Is this a bucket which is not a real region (e.g. unspecified, cruise ships)?
    """

    def to_record(self) -> dict[str, Any]:
        """
        Convert to a JSON-ready record

        The record also carries `deaths`,
        a legacy alias of `deceased` kept for older consumers.
        `name_ja` is only included when it is known.

        Returns
        -------
        :
            Record with the field names used by downstream consumers
        """
        res: dict[str, Any] = {
            "confirmed": self.confirmed,
            "dailyConfirmedCount": list(self.daily_confirmed_count),
            "dailyConfirmedStartDate": self.daily_confirmed_start_date,
            "newlyConfirmed": self.newly_confirmed,
            "yesterdayConfirmed": self.yesterday_confirmed,
            "dailyDeceasedCount": list(self.daily_deceased_count),
            "dailyDeceasedStartDate": self.daily_deceased_start_date,
            "newlyDeceased": self.newly_deceased,
            "yesterdayDeceased": self.yesterday_deceased,
            "deceased": self.deceased,
            "cruisePassenger": self.cruise_passenger,
            "recovered": self.recovered,
            "critical": self.critical,
            "tested": self.tested,
            "confirmedByCity": dict(self.confirmed_by_city),
            "pseudoPrefecture": self.pseudo_prefecture,
            "deaths": self.deceased,
            "name": self.name,
        }
        if self.name_ja is not None:
            res["name_ja"] = self.name_ja

        return res
