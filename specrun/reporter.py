import logging
import os
from typing import TYPE_CHECKING

from .exceptions import ReporterInstantiationError, ReporterLoadError
from .path import is_relative_path

if TYPE_CHECKING:
    from .runner import RunnerBase

_logger = logging.getLogger(__name__)


def resolve_reporter(name_or_path: str) -> str:
    if is_relative_path(name_or_path):
        return os.path.abspath(name_or_path)
    return name_or_path


def register_reporter(reporter_module_name: str, runner: "RunnerBase") -> None:
    """Replaces every reporter registered on `runner` with the one built from
    `reporter_module_name`.
    """
    identifier = resolve_reporter(reporter_module_name)
    try:
        factory = runner.loader.load(identifier)
    except Exception as e:
        raise ReporterLoadError(reporter_module_name, e) from e

    try:
        reporter = factory()
    except Exception as e:
        raise ReporterInstantiationError(reporter_module_name, e) from e

    _logger.debug(f"using reporter {type(reporter).__name__} from {identifier}")
    runner.clear_reporters()
    runner.add_reporter(reporter)
