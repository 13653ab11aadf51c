import dataclasses
import os
import pathlib
import types
from typing import Callable, Mapping, MutableMapping, Optional, Sequence

from .dispatcher import ParallelRunnerFactoryType, RunnerFactoryType, run_specs
from .environment import set_environment_variables
from .options import parse_options
from .path import PathLikeType, unwindows
from .runner import PrintType

HELP_COMMAND = "help"
USAGE_ERROR_EXIT_CODE = 1


@dataclasses.dataclass(frozen=True)
class CommandContext:
    project_base_dir: str
    spec_dir: str
    examples_dir: pathlib.Path
    print: PrintType
    registry: "CommandRegistry"


@dataclasses.dataclass(frozen=True)
class CommandAction:
    description: str
    action: Callable[[CommandContext], None]
    alias: Optional[str] = None

    def matches(self, name: str, arg: str) -> bool:
        return arg == name or (self.alias is not None and arg == self.alias)


CommandRegistry = Mapping[str, CommandAction]


def build_registry(actions: Mapping[str, CommandAction]) -> CommandRegistry:
    return types.MappingProxyType(dict(actions))


def find_command(
    args: Sequence[str], registry: CommandRegistry
) -> Optional[CommandAction]:
    found: Optional[CommandAction] = None
    for arg in args:
        for name, command in registry.items():
            if command.matches(name, arg):
                found = command
    return found


def _environ() -> MutableMapping[str, str]:
    return os.environ


@dataclasses.dataclass(frozen=True)
class CommandDeps:
    print: PrintType
    platform: Callable[[], str]
    runner_factory: RunnerFactoryType
    parallel_runner_factory: ParallelRunnerFactoryType
    environ: MutableMapping[str, str] = dataclasses.field(default_factory=_environ)


class Command:
    def __init__(
        self,
        project_base_dir: PathLikeType,
        examples_dir: PathLikeType,
        deps: CommandDeps,
        registry: CommandRegistry,
    ) -> None:
        self._is_windows = deps.platform() == "win32"
        base_dir = str(project_base_dir)
        self._project_base_dir = unwindows(base_dir) if self._is_windows else base_dir
        self._spec_dir = f"{self._project_base_dir}/spec"
        self._examples_dir = pathlib.Path(examples_dir)
        self._deps = deps
        self._registry = registry

    @property
    def project_base_dir(self) -> str:
        return self._project_base_dir

    @property
    def spec_dir(self) -> str:
        return self._spec_dir

    def _context(self) -> CommandContext:
        return CommandContext(
            project_base_dir=self._project_base_dir,
            spec_dir=self._spec_dir,
            examples_dir=self._examples_dir,
            print=self._deps.print,
            registry=self._registry,
        )

    def _print_usage_errors(self, usage_errors: Sequence[str]) -> None:
        for e in usage_errors:
            self._deps.print(e)

        self._deps.print("")
        help_command = self._registry.get(HELP_COMMAND)
        if help_command is not None:
            help_command.action(self._context())

    async def run(self, args: Sequence[str]) -> int:
        set_environment_variables(args, self._deps.environ)

        command = find_command(args, self._registry)
        if command is not None:
            command.action(self._context())
            return 0

        options = parse_options(args, self._is_windows)
        if len(options.usage_errors) > 0:
            self._print_usage_errors(options.usage_errors)
            return USAGE_ERROR_EXIT_CODE

        return await run_specs(
            self._deps.runner_factory,
            self._deps.parallel_runner_factory,
            self._project_base_dir,
            options,
            environ=self._deps.environ,
        )
