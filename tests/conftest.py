import pytest

from helpers import FakeSession


@pytest.fixture
def session():
    return FakeSession()
