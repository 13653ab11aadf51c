import importlib
import logging
import pathlib
import re
from types import ModuleType
from typing import Any, Callable, Optional, Tuple

from . import py_module
from .exceptions import InvalidReporterError
from .py_module import _parse_entry_point

_logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTE = "Reporter"
_ATTRIBUTE = re.compile(py_module.ID_REGEX)

ReporterFactoryType = Callable[[], Any]


def _split_attribute(identifier: str) -> Tuple[str, Optional[str]]:
    parsed = _parse_entry_point(identifier)
    if parsed is not None:
        return parsed

    # file paths are not dotted names, e.g. `./reporter.py::Name`
    target, sep, attr = identifier.rpartition("::")
    if sep and _ATTRIBUTE.fullmatch(attr):
        return target, attr
    return identifier, None


def _is_file_target(target: str) -> bool:
    return target.endswith(".py") or pathlib.Path(target).is_absolute()


def _get_factory(module: ModuleType, attr: str, identifier: str) -> ReporterFactoryType:
    factory = getattr(module, attr, None)
    if factory is None or not callable(factory):
        raise InvalidReporterError(
            identifier, f"expected to have a callable `{attr}`: {module.__name__}"
        )
    ret: ReporterFactoryType = factory
    return ret


class ModuleLoader:
    """
    Loads the reporter constructor that an identifier points at.

    - `/abs/path/reporter.py` executes the file and returns its `Reporter`
    - `package.module::Name` imports `package.module` and returns `Name`
    - `package.module` imports it and returns its `Reporter`

    A file path may also be followed by `::Name`.
    """

    def _load_module(self, target: str) -> ModuleType:
        if _is_file_target(target):
            _logger.debug(f"loading reporter from file: {target}")
            return py_module.load(pathlib.Path(target), "reporter")

        if not py_module.is_dotted_name(target):
            raise ValueError(f"invalid module name: {target}")

        _logger.debug(f"importing reporter module: {target}")
        return importlib.import_module(target)

    def load(self, identifier: str) -> ReporterFactoryType:
        target, attr = _split_attribute(identifier)
        module = self._load_module(target)
        return _get_factory(module, attr or DEFAULT_ATTRIBUTE, identifier)
