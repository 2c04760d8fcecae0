import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from cavecrawl import logging_utils  # noqa: E402
from cavecrawl.cave import CaveGenerator, GenerationParameters, SEED_MODE_FIXED  # noqa: E402
from cavecrawl.cave.catalog import STARTER_ENEMIES, STARTER_ITEMS  # noqa: E402


@pytest.fixture(autouse=True)
def _restore_log_settings():
    """Tests may call configure(); put the threshold and mode back afterwards."""
    saved = dict(logging_utils._settings)
    try:
        yield
    finally:
        logging_utils._settings.update(saved)


@pytest.fixture()
def fixed_params():
    return GenerationParameters(seed=1234, seed_mode=SEED_MODE_FIXED)


@pytest.fixture()
def generator(fixed_params):
    return CaveGenerator(fixed_params, items=STARTER_ITEMS, enemies=STARTER_ENEMIES)


@pytest.fixture()
def key_item():
    return STARTER_ITEMS[0]
