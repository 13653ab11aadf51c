import pathlib
import sys

import pytest

from specrun.py_module import _parse_entry_point, is_dotted_name, load

CURRENT_FILE = pathlib.Path(__file__).resolve()
BASE_DIR = CURRENT_FILE.parent
REPORTERS_DIR = BASE_DIR / "fakes/reporters"


def test__parse_entry_point() -> None:
    assert _parse_entry_point("hoge") is None
    assert _parse_entry_point("hoge.fuga") is None
    assert _parse_entry_point("hoge.fuga::Piyo") == ("hoge.fuga", "Piyo")
    assert _parse_entry_point("hoge::piyo") == ("hoge", "piyo")
    assert _parse_entry_point("::piyo") is None
    assert _parse_entry_point("1::piyo") is None
    assert _parse_entry_point("hoge::2") is None
    assert _parse_entry_point("hoge::piyo\nfuga") is None


def test_is_dotted_name() -> None:
    assert is_dotted_name("hoge")
    assert is_dotted_name("hoge.fuga")
    assert is_dotted_name("_hoge1._fuga2_")
    assert not is_dotted_name("hoge.")
    assert not is_dotted_name("1hoge")
    assert not is_dotted_name("hoge/fuga")
    assert not is_dotted_name("hoge::Fuga")
    assert not is_dotted_name("")


def test_load() -> None:
    with pytest.raises(FileNotFoundError):
        load(BASE_DIR / "hoge.py", "reporter")

    with pytest.raises(FileNotFoundError):
        load(BASE_DIR, "reporter")

    module = load(REPORTERS_DIR / "good_reporter.py", "foo")
    assert getattr(module, "Reporter") is not None  # NOQA: B009
    assert module.__name__.startswith("specrun._modules.foo_")
    assert module.__file__ == str(REPORTERS_DIR / "good_reporter.py")
    assert sys.modules[module.__name__] is module

    module2 = load(REPORTERS_DIR / "good_reporter.py", "foo")
    assert module2.__name__ != module.__name__
    assert module2.Reporter is not module.Reporter

    # errors raised while executing the module propagate as is
    with pytest.raises(BufferError):
        load(REPORTERS_DIR / "error_reporter.py", "reporter")
