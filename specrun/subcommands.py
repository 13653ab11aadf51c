import logging
import pathlib
import re
import shutil
from typing import Pattern

import pytest

from ._version import __version__
from .command import (
    HELP_COMMAND,
    CommandAction,
    CommandContext,
    CommandRegistry,
    build_registry,
)

_logger = logging.getLogger(__name__)

CONFIG_TEMPLATE = "specrun.toml"
EXAMPLES_NAME = "specrun_examples"

_COMMAND_COLUMN_WIDTH = 10
_OPTION_COLUMN_WIDTH = 18

_OPTIONS = (
    ("--parallel=N", "Run in parallel with N workers"),
    (
        "--parallel=auto",
        "Run in parallel with an automatically chosen number of workers",
    ),
    ("--no-color", "turn off color in spec output"),
    ("--color", "force turn on color in spec output"),
    ("--filter=", "filter specs to run only those that match the given string"),
    ("--helper=", "load helper files that match the given string"),
    ("--require=", "load module that match the given string"),
    ("--fail-fast", "stop specrun execution on spec failure"),
    ("--config=", "path to your optional specrun.toml"),
    ("--reporter=", "path to reporter to use instead of the default reporter"),
    ("--", "marker to signal the end of options meant for specrun"),
)


def _copy_files(
    src_dir: pathlib.Path, dest_dir: pathlib.Path, pattern: Pattern[str]
) -> None:
    for src in sorted(src_dir.iterdir()):
        if src.is_file() and pattern.search(src.name):
            _logger.debug(f"copying {src} to {dest_dir}")
            shutil.copyfile(src, dest_dir / src.name)


def init_specrun(context: CommandContext) -> None:
    support_dir = pathlib.Path(context.spec_dir) / "support"
    support_dir.mkdir(parents=True, exist_ok=True)

    config_path = support_dir / CONFIG_TEMPLATE
    if config_path.exists():
        context.print(
            f"spec/support/{CONFIG_TEMPLATE} already exists in your project."
        )
        return

    shutil.copyfile(context.examples_dir / CONFIG_TEMPLATE, config_path)


def install_examples(context: CommandContext) -> None:
    spec_dir = pathlib.Path(context.spec_dir)
    project_base_dir = pathlib.Path(context.project_base_dir)
    examples_dir = context.examples_dir

    targets = (
        (
            examples_dir / "spec" / "helpers" / EXAMPLES_NAME,
            spec_dir / "helpers" / EXAMPLES_NAME,
            re.compile(r"[Hh]elper\.py"),
        ),
        (
            examples_dir / "lib" / EXAMPLES_NAME,
            project_base_dir / "lib" / EXAMPLES_NAME,
            re.compile(r"\.py"),
        ),
        (
            examples_dir / "spec" / EXAMPLES_NAME,
            spec_dir / EXAMPLES_NAME,
            re.compile(r"[Ss]pec\.py"),
        ),
    )

    (spec_dir / "support").mkdir(parents=True, exist_ok=True)
    for _, dest_dir, _ in targets:
        dest_dir.mkdir(parents=True, exist_ok=True)

    for src_dir, dest_dir, pattern in targets:
        _copy_files(src_dir, dest_dir, pattern)


def show_help(context: CommandContext) -> None:
    out = context.print
    out("Usage: specrun [command] [options] [files] [--]")
    out("")
    out("Commands:")
    for name, command in context.registry.items():
        name_text = name
        if command.alias is not None:
            name_text = f"{name},{command.alias}"
        out(f"{name_text.rjust(_COMMAND_COLUMN_WIDTH)}\t{command.description}")
    out("")
    out("If no command is given, specs will be run")
    out("")
    out("")

    out("Options:")
    for flag, description in _OPTIONS:
        out(f"{flag.rjust(_OPTION_COLUMN_WIDTH)}\t{description}")
    out("")
    out("The given arguments take precedence over options in your specrun.toml")
    out(
        "The path to your optional specrun.toml can also be configured "
        "by setting the SPECRUN_CONFIG_PATH environment variable"
    )


def show_version(context: CommandContext) -> None:
    context.print(f"specrun v{__version__}")
    context.print(f"pytest v{pytest.__version__}")


def default_registry() -> CommandRegistry:
    return build_registry(
        {
            "init": CommandAction("initialize specrun", init_specrun),
            "examples": CommandAction("install examples", install_examples),
            HELP_COMMAND: CommandAction("show help", show_help, alias="-h"),
            "version": CommandAction(
                "show specrun and pytest versions", show_version, alias="-v"
            ),
        }
    )

