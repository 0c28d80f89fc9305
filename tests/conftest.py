# tests/conftest.py
# Shared fixtures: deterministic randomness and a fixed clock so generated
# messages are reproducible.
import random
from datetime import datetime, timedelta, timezone

import pytest

from hl7_codec.synthetic import SyntheticDataGenerator

FIXED_NOW = datetime(2026, 1, 15, 10, 30, 0, tzinfo=timezone(timedelta(hours=-5)))
FIXED_TS = "20260115103000-0500"


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def synthetic(rng, clock):
    return SyntheticDataGenerator(rng=rng, clock=clock)
