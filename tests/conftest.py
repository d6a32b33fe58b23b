import os
from datetime import date
from unittest.mock import patch

import pytest

from datespan import DateRange

try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass


@pytest.fixture
def july_range():
    """The three days 2012-07-28, 2012-07-29 and 2012-07-30."""
    return DateRange.of(date(2012, 7, 28), date(2012, 7, 31))


@pytest.fixture
def cli_env():
    """Pin CLI configuration so a developer's environment cannot leak in."""
    with patch.dict(os.environ, {"DATESPAN_MAX_DATES": "366"}, clear=False):
        yield
