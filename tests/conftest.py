import pytest

from whiteboard.core import Whiteboard, WhiteboardConfig
from whiteboard.core.identity import CounterIdGenerator
from whiteboard.observability import AuditCollector

from .fixtures import shuffled_four, extract_board


@pytest.fixture
def id_generator():
    return CounterIdGenerator(prefix="new_")


@pytest.fixture
def audit():
    return AuditCollector()


@pytest.fixture
def board(id_generator, audit):
    """dog <- rabbit <- cat <- hamster."""
    return Whiteboard(shuffled_four(), id_generator=id_generator, audit=audit)


@pytest.fixture
def extract_whiteboard(id_generator):
    return Whiteboard(extract_board(), id_generator=id_generator)


@pytest.fixture
def strict_config():
    return WhiteboardConfig(allow_multiple_chains=False, reject_branching=True)
