import pytest

from helpers import counting_source, drive
from maelstrom_node import BroadcastServer, EchoServer, IDGen


@pytest.fixture
def broadcast():
    def run(lines, **kwargs):
        return drive(lambda n: BroadcastServer(n, IDGen(counting_source())), lines, **kwargs)
    return run


@pytest.fixture
def echo():
    def run(lines, **kwargs):
        return drive(lambda n: EchoServer(n, IDGen(counting_source())), lines, **kwargs)
    return run
