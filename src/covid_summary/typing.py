"""
Type hints that are used throughout
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pandas as pd
from typing_extensions import TypeAlias

PatientRecord: TypeAlias = Mapping[str, Any]
"""
A single row of the patient ledger

Keys used for aggregation are
`dateAnnounced`, `detectedPrefecture`, `detectedCityTown`,
`patientStatus`, `confirmedPatient`, `deceasedDate` and `knownCluster`.
Any other keys are ignored.
"""

ManualDailyRow: TypeAlias = Mapping[str, Any]
"""
A row of the manually curated daily spreadsheet

Keys: `date` and optionally `recovered`, `critical`, `tested`
(cumulative totals, as free text).
"""

ManualRegionRow: TypeAlias = Mapping[str, Any]
"""
A row of the manually curated per-region spreadsheet

Keys: `prefecture` and optionally `recovered` and `prefectureJa`.
"""

CruiseCountRow: TypeAlias = Mapping[str, Any]
"""
A row of cruise-ship cumulative counts

Keys: `date` plus `{ship}{Metric}` for each ship prefix and metric,
e.g. `dpConfirmed` or `nagasakiTested`.
"""

DailySummaryFrame: TypeAlias = pd.DataFrame
"""
Type alias for the [pandas.DataFrame][pd.DataFrame] shape of the daily summary

For typing purposes, this is just a direct alias of [pandas.DataFrame][pd.DataFrame].
However, the point of defining this
is to provide greater clarity of the kind of data we expect.

The index holds ISO date strings, sorted ascending.
The columns are the summary fields (`confirmed`, `confirmedCumulative`, ...).
All values are integers.

```python
            confirmed  confirmedCumulative  deceased  deceasedCumulative
date
2020-03-01          2                    2         0                   0
2020-03-02          0                    2         1                   1
```
"""
