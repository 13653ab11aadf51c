import dataclasses
import enum
import sys
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .environment import is_environment_variable
from .exceptions import InvalidWorkerCountError
from .path import unwindows
from .workers import resolve_worker_count

END_OF_OPTIONS = "--"
PARALLEL_PREFIX = "--parallel="


@dataclasses.dataclass(frozen=True)
class ParsedOptions:
    color: bool
    config_path: Optional[str] = None
    filter: Optional[str] = None
    fail_fast: Optional[bool] = None
    random: Optional[bool] = None
    seed: Optional[str] = None
    helpers: Tuple[str, ...] = ()
    requires: Tuple[str, ...] = ()
    reporter: Optional[str] = None
    num_workers: int = 1
    files: Tuple[str, ...] = ()
    usage_errors: Tuple[str, ...] = ()


@enum.unique
class _Mode(enum.Enum):
    overwrite = enum.auto()
    append = enum.auto()
    boolean = enum.auto()


@dataclasses.dataclass(frozen=True)
class _ValueFlag:
    prefix: str
    field: str
    mode: _Mode


_SWITCHES: Dict[str, Tuple[str, bool]] = {
    "--no-color": ("color", False),
    "--color": ("color", True),
    "--fail-fast": ("fail_fast", True),
}

_VALUE_FLAGS: Tuple[_ValueFlag, ...] = (
    _ValueFlag("--filter=", "filter", _Mode.overwrite),
    _ValueFlag("--helper=", "helpers", _Mode.append),
    _ValueFlag("--require=", "requires", _Mode.append),
    _ValueFlag("--seed=", "seed", _Mode.overwrite),
    _ValueFlag("--config=", "config_path", _Mode.overwrite),
    _ValueFlag("--reporter=", "reporter", _Mode.overwrite),
    _ValueFlag("--random=", "random", _Mode.boolean),
)


def _find_value_flag(arg: str) -> Optional[_ValueFlag]:
    for flag in _VALUE_FLAGS:
        if arg.startswith(flag.prefix):
            return flag
    return None


def _apply_value_flag(values: Dict[str, Any], flag: _ValueFlag, arg: str) -> None:
    value = arg[len(flag.prefix) :]
    if flag.mode == _Mode.append:
        values[flag.field].append(value)
    elif flag.mode == _Mode.boolean:
        values[flag.field] = value == "true"
    else:
        values[flag.field] = value


def is_file_arg(arg: str) -> bool:
    return not arg.startswith("--") and is_environment_variable(arg) is None


def _use_color() -> bool:
    return sys.stdout.isatty()


def parse_options(
    argv: Sequence[str], is_windows: bool = False, color: Optional[bool] = None
) -> ParsedOptions:
    values: Dict[str, Any] = {
        "color": _use_color() if color is None else color,
        "num_workers": 1,
        "helpers": [],
        "requires": [],
    }
    files: List[str] = []
    unknown_options: List[str] = []
    usage_errors: List[str] = []

    for arg in argv:
        if arg in _SWITCHES:
            field, value = _SWITCHES[arg]
            values[field] = value
            continue

        flag = _find_value_flag(arg)
        if flag is not None:
            _apply_value_flag(values, flag, arg)
        elif arg.startswith(PARALLEL_PREFIX):
            try:
                values["num_workers"] = resolve_worker_count(
                    arg[len(PARALLEL_PREFIX) :]
                )
            except InvalidWorkerCountError as e:
                usage_errors.append(str(e))
        elif arg == END_OF_OPTIONS:
            break
        elif is_file_arg(arg):
            files.append(unwindows(arg) if is_windows else arg)
        elif arg.startswith("--"):
            unknown_options.append(arg)

    if len(unknown_options) > 0:
        usage_errors.append("Unknown options: " + ", ".join(unknown_options))

    values["helpers"] = tuple(values["helpers"])
    values["requires"] = tuple(values["requires"])
    return ParsedOptions(
        files=tuple(files), usage_errors=tuple(usage_errors), **values
    )
