"""
Re-useable fixtures etc. for tests

See https://docs.pytest.org/en/7.1.x/reference/fixtures.html#conftest-py-sharing-fixtures-across-multiple-files
"""

from __future__ import annotations

import pandas as pd
import pytest


@pytest.fixture(scope="session", autouse=True)
def pandas_terminal_width():
    # Set pandas terminal width so that error messages which include frames
    # don't depend on terminal width.
    pd.set_option("display.width", 120)
    pd.set_option("display.max_columns", 1000)
