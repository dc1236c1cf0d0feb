"""
Cruise ships as pseudo-regions

Passengers of the quarantined cruise ships were never entered
into the patient ledger.
Their counts come from a separate sheet of cumulative totals per date,
which we turn into daily increments here
so the ships can be shown alongside the real regions.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable, Sequence

from attrs import define

from covid_summary.dates import iter_days
from covid_summary.parsing import ensure_records, is_present, safe_parse_int
from covid_summary.region_summary import RegionSummary
from covid_summary.typing import CruiseCountRow

logger = logging.getLogger(__name__)

CRUISE_START_DATE = "2020-02-04"
"""
First day of the cruise-ship daily vectors
"""

CRUISE_METRICS: tuple[str, ...] = (
    "Confirmed",
    "Deceased",
    "Recovered",
    "Critical",
    "Tested",
)
"""
Metrics reported per ship in the cruise count sheet
"""


@define(frozen=True)
class CruiseShip:
    """
    A cruise ship reported in the cruise count sheet
    """

    key_prefix: str
    """
    Prefix of the ship's columns in the sheet, e.g. `dp` for `dpConfirmed`
    """

    name: str
    """
    Display name, used as the ship's region key
    """

    name_ja: str
    """
    Localized (Japanese) name
    """

    def column(self, metric: str) -> str:
        """
        Get the name of the sheet column holding `metric` for this ship

        Parameters
        ----------
        metric
            Metric, one of [CRUISE_METRICS][(m).]

        Returns
        -------
        :
            Column name, e.g. `dpConfirmed`
        """
        return f"{self.key_prefix}{metric}"


DIAMOND_PRINCESS = CruiseShip(
    key_prefix="dp",
    name="Diamond Princess Cruise Ship",
    name_ja="ダイヤモンド・プリンセス",
)

NAGASAKI_CRUISE = CruiseShip(
    key_prefix="nagasaki",
    name="Nagasaki Cruise Ship",
    name_ja="長崎のクルーズ船",
)

DEFAULT_CRUISE_SHIPS: tuple[CruiseShip, ...] = (DIAMOND_PRINCESS, NAGASAKI_CRUISE)


def get_daily_increments(
    rows_by_date: dict[str, CruiseCountRow], column: str, days: Sequence[str]
) -> list[int]:
    """
    Turn cumulative totals into daily increments

    Days with no row, or with an empty cell, get an increment of zero
    and do not update the last seen total.
    As a result, the whole change across a gap lands on the first day after it.

    Parameters
    ----------
    rows_by_date
        Cruise count rows, keyed by date

    column
        Column holding the cumulative total

    days
        Days to produce increments for, in order

    Returns
    -------
    :
        One increment per day in `days`
    """
    res = []
    last_seen = 0
    for day in days:
        row = rows_by_date.get(day)
        value = None if row is None else row.get(column)
        if is_present(value):
            total = safe_parse_int(value)
            res.append(total - last_seen)
            last_seen = total
        else:
            res.append(0)

    return res


def summarise_cruise_ship(
    ship: CruiseShip,
    rows_by_date: dict[str, CruiseCountRow],
    latest_row: CruiseCountRow,
    days: Sequence[str],
) -> RegionSummary:
    """
    Summarise a single cruise ship

    Parameters
    ----------
    ship
        Ship to summarise

    rows_by_date
        Cruise count rows, keyed by date

    latest_row
        Most recent row, which supplies the totals

    days
        Days covered by the daily vectors, in order

    Returns
    -------
    :
        The ship as a pseudo-region
    """
    confirmed_counts = get_daily_increments(
        rows_by_date, ship.column("Confirmed"), days
    )
    deceased_counts = get_daily_increments(rows_by_date, ship.column("Deceased"), days)

    res = RegionSummary(
        name=ship.name,
        name_ja=ship.name_ja,
        confirmed=safe_parse_int(latest_row.get(ship.column("Confirmed"))),
        recovered=safe_parse_int(latest_row.get(ship.column("Recovered"))),
        deceased=safe_parse_int(latest_row.get(ship.column("Deceased"))),
        critical=safe_parse_int(latest_row.get(ship.column("Critical"))),
        tested=safe_parse_int(latest_row.get(ship.column("Tested"))),
        daily_confirmed_count=confirmed_counts,
        daily_confirmed_start_date=days[0] if days else None,
        daily_deceased_count=deceased_counts,
        daily_deceased_start_date=days[0] if days else None,
    )

    if confirmed_counts:
        res.newly_confirmed = confirmed_counts[-1]
    if len(confirmed_counts) > 2:  # noqa: PLR2004
        res.yesterday_confirmed = confirmed_counts[-2]

    if deceased_counts:
        res.newly_deceased = deceased_counts[-1]
    # Existing consumers see yesterday's value in `newly_deceased` here,
    # `yesterday_deceased` stays at zero for ships.
    if len(deceased_counts) > 2:  # noqa: PLR2004
        res.newly_deceased = deceased_counts[-2]

    return res


def generate_cruise_ship_region_summary(
    cruise_rows: Iterable[CruiseCountRow],
    today: dt.date,
    start_date: str | dt.date = CRUISE_START_DATE,
    ships: Iterable[CruiseShip] = DEFAULT_CRUISE_SHIPS,
) -> dict[str, RegionSummary]:
    """
    Synthesise a pseudo-region per cruise ship

    Totals are taken from the last row of `cruise_rows`,
    not summed from the daily vectors.

    Parameters
    ----------
    cruise_rows
        Cruise-ship cumulative counts, in date order

    today
        Last day of the daily vectors

    start_date
        First day of the daily vectors

    ships
        Ships to synthesise

    Returns
    -------
    :
        Summary per ship, keyed by the ship's display name
    """
    rows = ensure_records(cruise_rows, name="cruise_rows")
    rows_by_date = {str(r.get("date")): r for r in rows if is_present(r.get("date"))}
    latest_row = rows[-1] if rows else {}
    days = list(iter_days(start_date, today))

    res = {}
    for ship in ships:
        res[ship.name] = summarise_cruise_ship(
            ship, rows_by_date=rows_by_date, latest_row=latest_row, days=days
        )

    logger.debug("Synthesised %d cruise ship regions over %d days", len(res), len(days))

    return res
