import asyncio
import logging
import os
import pathlib
import sys

from .command import Command, CommandDeps
from .exceptions import SpecRunError
from .logging_utils import get_loglevel, setup_logger
from .runner import ParallelRunner, Runner
from .subcommands import default_registry

EXAMPLES_DIR = pathlib.Path(__file__).resolve().parent / "examples"
LOGLEVEL_ENV = "SPECRUN_LOGLEVEL"


def _use_pretty_logging() -> bool:
    return sys.stderr.isatty()


def _platform() -> str:
    return sys.platform


def create_command(project_base_dir: pathlib.Path) -> Command:
    deps = CommandDeps(
        print=print,
        platform=_platform,
        runner_factory=Runner,
        parallel_runner_factory=ParallelRunner,
    )
    return Command(project_base_dir, EXAMPLES_DIR, deps, default_registry())


def cli() -> None:
    setup_logger(
        get_loglevel(os.environ.get(LOGLEVEL_ENV), logging.WARNING),
        pretty=_use_pretty_logging(),
    )
    command = create_command(pathlib.Path.cwd())
    try:
        exit_code = asyncio.run(command.run(sys.argv[1:]))
    except SpecRunError as e:
        sys.stderr.write(f"specrun: {e}\n")
        sys.exit(1)

    sys.exit(exit_code)
