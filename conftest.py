"""Configures pytest further."""
import pytest

from textbookrsa import Key
from textbookrsa import KeyPair
from textbookrsa import SecureRandomSource


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extreme value extremely slow tests")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


@pytest.fixture
def rng():
    """An acquired random source, released after the test."""
    with SecureRandomSource() as source:
        yield source


@pytest.fixture(scope="session")
def vector_pair() -> KeyPair:
    """The classic p=61, q=53, e=17 key pair."""
    return KeyPair(Key(3233, 17), Key(3233, 2753))
