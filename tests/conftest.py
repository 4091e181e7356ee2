import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import ConfigurationManager  # noqa: E402
from tests.fixtures.invoice_pages import INVOICE_PAGES  # noqa: E402


@pytest.fixture
def invoice_pages():
    return list(INVOICE_PAGES)


@pytest.fixture(autouse=True)
def default_configuration():
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()
