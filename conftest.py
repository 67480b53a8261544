import pytest

from signbraille import EngineError, EngineHandle, NormalizationOptions, get_profile


class FakeEngine:
    """Deterministic stand-in for liblouis: one 6-dot cell per input character."""

    def __init__(self, fail_on=(), raise_on=(), overrides=None, version="fake-1.0"):
        self.fail_on = set(fail_on)
        self.raise_on = set(raise_on)
        self.overrides = dict(overrides or {})
        self._version = version
        self.calls = []

    def translate(self, tables, text):
        self.calls.append((tuple(tables), text))
        if text in self.raise_on:
            raise EngineError(f"engine aborted on {text!r}")
        if text in self.fail_on:
            return None
        if text in self.overrides:
            return self.overrides[text]
        return "".join(chr(0x2800 + (ord(ch) & 0x3F)) for ch in text)

    def version(self):
        return self._version


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def make_engine():
    return FakeEngine


@pytest.fixture
def fake_handle():
    return EngineHandle(FakeEngine)


@pytest.fixture
def g1_profile():
    return get_profile("en-us-g1")


@pytest.fixture
def g2_profile():
    return get_profile("en-us-g2")


@pytest.fixture
def tidy_options():
    return NormalizationOptions(normalize_whitespace=True, smart_quotes=True, preserve_line_breaks=True)
