import pytest

from .fakes import FakeUpstream


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()
