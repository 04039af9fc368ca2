import sys
from pathlib import Path

import pytest


# Make the repo root importable when running pytest from anywhere
THIS_DIR = Path(__file__).resolve().parent
ROOT_DIR = THIS_DIR.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


@pytest.fixture()
def payload():
    return {
        "baseTemperature": 8.66,
        "monthlyVariance": [
            {"year": 1753, "month": 1, "variance": -6.07},
            {"year": 1753, "month": 2, "variance": -1.262},
            {"year": 1753, "month": 12, "variance": 0.5},
            {"year": 1760, "month": 6, "variance": 2.1},
            {"year": 1770, "month": 7, "variance": 3.2},
        ],
    }


@pytest.fixture()
def dataset(payload):
    from data import parse_dataset

    return parse_dataset(payload)
