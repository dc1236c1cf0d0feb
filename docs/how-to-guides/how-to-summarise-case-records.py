# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.16.6
#   kernelspec:
#     display_name: Python 3 (ipykernel)
#     language: python
#     name: python3
# ---

# %% [markdown]
# # How to summarise case records
#
# Here we demonstrate how to turn a patient ledger,
# the manually curated spreadsheets and the cruise-ship counts
# into the daily and per-region summaries.
# Fetching the inputs and writing the output are left to you,
# here we simply write some small inputs by hand.

# %% [markdown]
# ## Imports

# %%
import datetime as dt
import json

import pandas as pd

from covid_summary.daily import generate_daily_summary
from covid_summary.dates import get_today
from covid_summary.regions import generate_region_summary
from covid_summary.summarise import Summariser

# %% [markdown]
# ## Inputs
#
# The patient ledger is a list of records,
# one per patient, with the keys used by the ledger's sheet.

# %%
patients = [
    {
        "dateAnnounced": "2020-03-01",
        "detectedPrefecture": "Tokyo",
        "detectedCityTown": "Minato",
        "patientStatus": "Hospitalized",
        "confirmedPatient": True,
    },
    {
        "dateAnnounced": "2020-03-01",
        "detectedPrefecture": "Osaka",
        "patientStatus": "Hospitalized",
        "confirmedPatient": True,
    },
    {
        "dateAnnounced": "2020-03-02",
        "detectedPrefecture": "Tokyo",
        "detectedCityTown": "Minato",
        "patientStatus": "Deceased",
        "deceasedDate": "2020-03-04",
        "confirmedPatient": True,
    },
    {
        "dateAnnounced": "2020-03-03",
        "detectedPrefecture": "Port Quarantine",
        "knownCluster": "Cruise Disembarked Passenger",
        "patientStatus": "Hospitalized",
        "confirmedPatient": True,
    },
]

# %% [markdown]
# The manual spreadsheets carry the numbers the ledger doesn't,
# e.g. tests, recoveries and critical cases.
# Their cumulative values are strings, as they come out of the sheet.
# Empty (or zero) cells are carried forward from the day before.

# %%
manual_daily_rows = [
    {"date": "2020-03-01", "tested": "100", "recovered": "0", "critical": "0"},
    {"date": "2020-03-02", "tested": "150", "recovered": "1", "critical": ""},
    {"date": "2020-03-03", "tested": "", "recovered": "1", "critical": "1"},
]
manual_region_rows = [
    {"prefecture": "Tokyo", "prefectureJa": "東京都", "recovered": "1"},
    {"prefecture": "Osaka", "prefectureJa": "大阪府", "recovered": ""},
]
cruise_rows = [
    {"date": "2020-02-05", "dpConfirmed": "10", "dpDeceased": "0"},
    {"date": "2020-02-06", "dpConfirmed": "20", "dpDeceased": "0"},
]

# %% [markdown]
# ## Summarise
#
# The simplest route is via a [Summariser][covid_summary.summarise.Summariser].
# Passing `now` fixes the last day of every daily vector,
# otherwise the wall clock is read (once).

# %%
summariser = Summariser()
res = summariser(
    patients,
    manual_daily_rows,
    manual_region_rows,
    cruise_rows,
    last_updated="2020-03-05T12:00:00+09:00",
    now=dt.datetime(2020, 3, 5, 3, tzinfo=dt.timezone.utc),
)

# %% [markdown]
# The daily summary is easiest to look at as a table.

# %%
pd.DataFrame(res.daily).set_index("date")

# %% [markdown]
# The region summary is sorted by confirmed count.
# Regions which aren't real prefectures, like the port of entry
# and the cruise ships, are flagged with `pseudoPrefecture`.

# %%
pd.DataFrame(res.regions)[
    ["name", "name_ja", "confirmed", "deceased", "recovered", "pseudoPrefecture"]
]

# %% [markdown]
# The result serialises straight to JSON.

# %%
print(json.dumps(res.to_dict(), ensure_ascii=False)[:500])

# %% [markdown]
# ## Configuring the summary
#
# The [Summariser][covid_summary.summarise.Summariser] can be configured,
# e.g. to change the list of real regions
# or to leave out the cruise ships.

# %%
summariser_tokyo_only = Summariser(region_names=["Tokyo"], cruise_ships=[])
res_tokyo_only = summariser_tokyo_only(
    patients,
    manual_daily_rows,
    manual_region_rows,
    cruise_rows=None,
    last_updated="2020-03-05T12:00:00+09:00",
    now=dt.datetime(2020, 3, 5, 3, tzinfo=dt.timezone.utc),
)
pd.DataFrame(res_tokyo_only.regions)[["name", "confirmed", "pseudoPrefecture"]]

# %% [markdown]
# ## Running the steps separately
#
# The two summaries can also be generated on their own.

# %%
today = get_today(now=dt.datetime(2020, 3, 5, 3, tzinfo=dt.timezone.utc))
regions = generate_region_summary(
    patients, manual_region_rows, cruise_rows=None, today=today
)
[(r["name"], r["dailyConfirmedCount"][-5:]) for r in regions]

# %%
daily = generate_daily_summary(patients, manual_daily_rows, cruise_rows=None)
pd.DataFrame(daily).set_index("date")[["confirmed", "confirmedCumulative", "active"]]
