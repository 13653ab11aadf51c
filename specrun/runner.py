import glob
import logging
import os
import pathlib
import random
import shlex
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Sequence

import pytest

from .config import RunnerConfig, find_config, parse
from .loader import ModuleLoader
from .path import PathLikeType, wrap_path

_logger = logging.getLogger(__name__)

NO_SPECS_FOUND_EXIT_CODE = 2
# pytest imports the plugin itself through `-p`, so it is only named here
PLUGIN_NAME = "specrun.pytest_plugin"
_GLOB_CHARS = ("*", "?", "[")

PrintType = Callable[..., None]


class RunnerBase(ABC):
    """Collaborator driven by the dispatcher to configure and execute a run."""

    loader: ModuleLoader

    @abstractmethod
    async def load_config_file(self, path: Optional[str] = None) -> None:
        ...

    @abstractmethod
    def configure_env(
        self,
        *,
        stop_spec_on_expectation_failure: Optional[bool] = None,
        stop_on_spec_failure: Optional[bool] = None,
    ) -> None:
        ...

    @abstractmethod
    def seed(self, value: str) -> None:
        ...

    @abstractmethod
    def randomize_tests(self, value: bool) -> None:
        ...

    @abstractmethod
    def add_matching_helper_files(self, patterns: Sequence[str]) -> None:
        ...

    @abstractmethod
    def add_requires(self, modules: Sequence[str]) -> None:
        ...

    @abstractmethod
    def clear_reporters(self) -> None:
        ...

    @abstractmethod
    def add_reporter(self, reporter: Any) -> None:
        ...

    @abstractmethod
    def show_colors(self, value: bool) -> None:
        ...

    @abstractmethod
    async def execute(
        self, files: Optional[Sequence[str]] = None, filter: Optional[str] = None
    ) -> int:
        ...


def _has_glob(pattern: str) -> bool:
    return any(c in pattern for c in _GLOB_CHARS)


def _match_files(base_dir: pathlib.Path, patterns: Sequence[str]) -> List[pathlib.Path]:
    ret: List[pathlib.Path] = []
    for pattern in patterns:
        matches = glob.glob(
            os.path.join(glob.escape(str(base_dir)), pattern), recursive=True
        )
        for m in sorted(matches):
            path = pathlib.Path(m).resolve()
            if path.is_file() and path not in ret:
                ret.append(path)
    return ret


class Runner(RunnerBase):
    """Runs specs in the current process with `pytest.main`.

    Reporters are pytest plugin objects. The default reporter is pytest's
    terminal reporter, which is disabled once reporters are cleared.
    """

    def __init__(
        self, project_base_dir: PathLikeType, print: PrintType = print
    ) -> None:
        self._project_base_dir = wrap_path(project_base_dir).resolve()
        self._print = print
        self._config = RunnerConfig()
        self._helper_files: List[pathlib.Path] = []
        self._requires: List[str] = []
        self._reporters: List[Any] = []
        self._use_default_reporter = True
        self._color = True
        self._random = True
        self._seed: Optional[str] = None
        self._stop_spec_on_expectation_failure = False
        self._stop_on_spec_failure = False
        self.loader = ModuleLoader()

    @property
    def project_base_dir(self) -> pathlib.Path:
        return self._project_base_dir

    @property
    def spec_dir(self) -> pathlib.Path:
        return self._project_base_dir / self._config.spec_dir

    @property
    def helper_files(self) -> List[pathlib.Path]:
        return list(self._helper_files)

    @property
    def requires(self) -> List[str]:
        return list(self._requires)

    @property
    def reporters(self) -> List[Any]:
        return list(self._reporters)

    @property
    def stop_spec_on_expectation_failure(self) -> bool:
        return self._stop_spec_on_expectation_failure

    @property
    def stop_on_spec_failure(self) -> bool:
        return self._stop_on_spec_failure

    async def load_config_file(self, path: Optional[str] = None) -> None:
        config_path = find_config(self._project_base_dir, path)
        if config_path is None:
            _logger.debug("no config file found, using defaults")
            config = RunnerConfig()
        else:
            _logger.info(f"loading config: {config_path}")
            config = parse(config_path)

        self._config = config
        env = config.env
        self.configure_env(
            stop_spec_on_expectation_failure=env.stop_spec_on_expectation_failure,
            stop_on_spec_failure=env.stop_on_spec_failure,
        )
        self.randomize_tests(env.random)
        if env.seed is not None:
            self.seed(env.seed)
        self.add_matching_helper_files(config.helpers)
        self.add_requires(config.requires)

    def configure_env(
        self,
        *,
        stop_spec_on_expectation_failure: Optional[bool] = None,
        stop_on_spec_failure: Optional[bool] = None,
    ) -> None:
        # NOTE: a failing assert always ends a pytest test, so the first flag is
        # kept for callers but does not change the pytest arguments.
        if stop_spec_on_expectation_failure is not None:
            self._stop_spec_on_expectation_failure = stop_spec_on_expectation_failure
        if stop_on_spec_failure is not None:
            self._stop_on_spec_failure = stop_on_spec_failure

    def seed(self, value: str) -> None:
        self._seed = value

    def randomize_tests(self, value: bool) -> None:
        self._random = value

    def add_matching_helper_files(self, patterns: Sequence[str]) -> None:
        for path in _match_files(self.spec_dir, patterns):
            if path not in self._helper_files:
                self._helper_files.append(path)

    def add_requires(self, modules: Sequence[str]) -> None:
        self._requires.extend(modules)

    def clear_reporters(self) -> None:
        self._reporters.clear()
        self._use_default_reporter = False

    def add_reporter(self, reporter: Any) -> None:
        self._reporters.append(reporter)

    def show_colors(self, value: bool) -> None:
        self._color = value

    def _resolve_spec_files(self, files: Optional[Sequence[str]]) -> List[pathlib.Path]:
        if not files:
            return _match_files(self.spec_dir, self._config.spec_files)

        ret: List[pathlib.Path] = []
        for f in files:
            if _has_glob(f):
                ret.extend(_match_files(self._project_base_dir, [f]))
            else:
                ret.append((self._project_base_dir / f).resolve())
        return ret

    def _resolve_seed(self) -> str:
        if self._seed is None:
            # every process of one run must share the seed to agree on the order
            self._seed = str(random.randrange(100000))
        return self._seed

    def _worker_args(self) -> List[str]:
        return []

    def build_pytest_args(
        self, spec_files: Sequence[pathlib.Path], filter: Optional[str] = None
    ) -> List[str]:
        base_dir = str(self._project_base_dir)
        # `pythonpath` also reaches xdist workers
        args = [
            "-p",
            PLUGIN_NAME,
            f"--rootdir={base_dir}",
            "-o",
            f"pythonpath={shlex.quote(base_dir)}",
        ]
        if self._use_default_reporter:
            args.append("--color=yes" if self._color else "--color=no")
        else:
            args.extend(["-p", "no:terminal"])

        if self._stop_on_spec_failure:
            args.append("-x")
        if filter is not None:
            args.append(f"--specrun-filter={filter}")
        if self._random:
            args.extend(["--specrun-random", f"--specrun-seed={self._resolve_seed()}"])

        args.extend(f"--specrun-helper={h}" for h in self._helper_files)
        args.extend(f"--specrun-require={r}" for r in self._requires)
        args.extend(self._worker_args())
        args.extend(str(f) for f in spec_files)
        return args

    async def execute(
        self, files: Optional[Sequence[str]] = None, filter: Optional[str] = None
    ) -> int:
        spec_files = self._resolve_spec_files(files)
        if len(spec_files) == 0:
            self._print("No specs found")
            return NO_SPECS_FOUND_EXIT_CODE

        args = self.build_pytest_args(spec_files, filter)
        _logger.debug(f"> pytest {' '.join(args)}")
        exit_code = pytest.main(args, plugins=list(self._reporters))

        if exit_code == pytest.ExitCode.NO_TESTS_COLLECTED:
            self._print("No specs found")
            return NO_SPECS_FOUND_EXIT_CODE
        return int(exit_code)


class ParallelRunner(Runner):
    """Runs specs across `num_workers` pytest-xdist worker processes."""

    def __init__(
        self,
        project_base_dir: PathLikeType,
        num_workers: int,
        print: PrintType = print,
    ) -> None:
        if num_workers < 2:
            raise ValueError("ParallelRunner requires at least 2 workers")
        super().__init__(project_base_dir, print)
        self._num_workers = num_workers

    @property
    def num_workers(self) -> int:
        return self._num_workers

    def _worker_args(self) -> List[str]:
        return ["-n", str(self._num_workers)]
