"""Fixtures for the storage tests."""

import pytest

from tests.unit.storage.fakes import FakeSeedr


@pytest.fixture
def fake_seedr() -> FakeSeedr:
    return FakeSeedr()
