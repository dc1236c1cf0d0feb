"""
Merge pandemic case records into nationwide daily and per-region summaries.

The inputs are a per-patient ledger,
manually curated override spreadsheets
and cruise-ship counts.
The outputs are two canonical, sorted series
which downstream dashboards consume.
"""

import importlib.metadata

__version__ = importlib.metadata.version("covid-summary")
