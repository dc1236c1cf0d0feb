"""
Code to support our tests

This is here, rather than in our `tests` directory
because of the issues that come
when you turn your tests into a package using `__init__.py` files
(for details, see https://docs.pytest.org/en/7.1.x/explanation/goodpractices.html#choosing-an-import-mode).
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from covid_summary.parsing import DECEASED_STATUS

TESTING_NOW = dt.datetime(2020, 3, 5, 3, 0, tzinfo=dt.timezone.utc)
"""
Fixed "now" used in tests (2020-03-05 12:00 in Japan Standard Time)
"""


def make_patient(  # noqa: PLR0913
    date_announced: str | None = "2020-03-01",
    region: str | None = "Tokyo",
    confirmed: bool = True,
    deceased_date: str | None = None,
    city: str | None = None,
    known_cluster: str | None = None,
    status: str | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Make a patient record as it appears in the ledger

    Parameters
    ----------
    date_announced
        Announcement date

    region
        Region the patient was detected in

    confirmed
        Is the patient confirmed?

    deceased_date
        Date of death.
        If supplied and `status` is not, the status is set to deceased.

    city
        City/town the patient was detected in

    known_cluster
        Cluster/exposure tag

    status
        Patient status

    **kwargs
        Any other ledger keys (passed through as is)

    Returns
    -------
    :
        Patient record
    """
    if status is None:
        status = DECEASED_STATUS if deceased_date is not None else "Hospitalized"

    return {
        "dateAnnounced": date_announced,
        "detectedPrefecture": region,
        "detectedCityTown": city,
        "patientStatus": status,
        "confirmedPatient": confirmed,
        "deceasedDate": deceased_date,
        "knownCluster": known_cluster,
        **kwargs,
    }
