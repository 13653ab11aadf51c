"""pytest plugin loaded by specrun runners with `-p specrun.pytest_plugin`.

Every setting travels as a command-line option so that pytest-xdist workers,
which rebuild their configuration from the controller's options, behave the
same as a single process.

PYTEST_DONT_REWRITE
"""
import importlib
import pathlib
import random
import re
from typing import List, Optional

import pytest

from . import py_module


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("specrun")
    group.addoption(
        "--specrun-filter",
        dest="specrun_filter",
        default=None,
        help="only run specs whose node id matches the given regular expression",
    )
    group.addoption(
        "--specrun-random",
        dest="specrun_random",
        action="store_true",
        default=False,
        help="run specs in a random order",
    )
    group.addoption(
        "--specrun-seed",
        dest="specrun_seed",
        default=None,
        help="seed used to randomize spec order",
    )
    group.addoption(
        "--specrun-helper",
        dest="specrun_helpers",
        action="append",
        default=[],
        help="helper file to load as a plugin before collection",
    )
    group.addoption(
        "--specrun-require",
        dest="specrun_requires",
        action="append",
        default=[],
        help="module to import before collection",
    )


def pytest_configure(config: pytest.Config) -> None:
    for name in config.getoption("specrun_requires"):
        importlib.import_module(name)

    for index, helper in enumerate(config.getoption("specrun_helpers")):
        module = py_module.load(pathlib.Path(helper), "helper")
        config.pluginmanager.register(module, f"specrun-helper-{index}")


def _filter_items(
    config: pytest.Config, items: List[pytest.Item], pattern: str
) -> None:
    regex = re.compile(pattern)
    selected: List[pytest.Item] = []
    deselected: List[pytest.Item] = []
    for item in items:
        if regex.search(item.nodeid):
            selected.append(item)
        else:
            deselected.append(item)

    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected


def pytest_collection_modifyitems(
    session: pytest.Session, config: pytest.Config, items: List[pytest.Item]
) -> None:
    pattern: Optional[str] = config.getoption("specrun_filter")
    if pattern is not None:
        _filter_items(config, items, pattern)

    if config.getoption("specrun_random"):
        random.Random(config.getoption("specrun_seed")).shuffle(items)


def pytest_report_header(config: pytest.Config) -> Optional[str]:
    if config.getoption("specrun_random"):
        return f"Randomized with seed {config.getoption('specrun_seed')}"
    return None
