import os

import pytest

from calckit.config import reset_settings
from calckit.utils import reset_logging


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in list(os.environ):
        if name.startswith("CALCKIT_"):
            monkeypatch.delenv(name)
    reset_settings()
    yield
    reset_settings()
    reset_logging()
