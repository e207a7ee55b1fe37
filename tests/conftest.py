import pytest

from clinic.registry import Registry
from clinic.seed import seed_demo


@pytest.fixture
def registry():
    reg = Registry(echo=False)
    yield reg
    reg.close()


@pytest.fixture
def seeded_registry(registry):
    seed_demo(registry)
    return registry


@pytest.fixture
def feed_input(monkeypatch):
    """Replace input() with a scripted sequence; EOF once it runs out."""

    def _feed(*answers):
        remaining = iter(answers)

        def fake_input(prompt=""):
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr("builtins.input", fake_input)

    return _feed
