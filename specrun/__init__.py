from ._version import __version__  # NOQA
from .command import (  # NOQA
    Command,
    CommandAction,
    CommandContext,
    CommandDeps,
    build_registry,
    find_command,
)
from .dispatcher import run_specs  # NOQA
from .environment import set_environment_variables  # NOQA
from .loader import ModuleLoader  # NOQA
from .logging_utils import setup_logger  # NOQA
from .options import ParsedOptions, parse_options  # NOQA
from .reporter import register_reporter, resolve_reporter  # NOQA
from .runner import ParallelRunner, Runner, RunnerBase  # NOQA
from .subcommands import default_registry  # NOQA
from .workers import resolve_worker_count  # NOQA
