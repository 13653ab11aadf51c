import os
import re
from typing import MutableMapping, Optional, Sequence, Tuple

_ASSIGNMENT = re.compile(r"([^=]+)=(.*)", re.DOTALL)


def is_environment_variable(arg: str) -> Optional[Tuple[str, str]]:
    if arg.startswith("--"):
        return None

    match = _ASSIGNMENT.match(arg)
    if match is None:
        return None

    return match.group(1), match.group(2)


def set_environment_variables(
    args: Sequence[str], environ: Optional[MutableMapping[str, str]] = None
) -> None:
    if environ is None:
        environ = os.environ

    for arg in args:
        assignment = is_environment_variable(arg)
        if assignment is not None:
            key, value = assignment
            environ[key] = value
