import logging
import os
import pathlib
from typing import Callable, Mapping, Optional

from .config import CONFIG_PATH_ENV
from .options import ParsedOptions
from .path import PathLikeType
from .reporter import register_reporter
from .runner import RunnerBase

_logger = logging.getLogger(__name__)

EXECUTION_ERROR_EXIT_CODE = 1

RunnerFactoryType = Callable[[pathlib.Path], RunnerBase]
ParallelRunnerFactoryType = Callable[[pathlib.Path, int], RunnerBase]


def create_runner(
    runner_factory: RunnerFactoryType,
    parallel_runner_factory: ParallelRunnerFactoryType,
    project_base_dir: pathlib.Path,
    num_workers: int,
) -> RunnerBase:
    if num_workers > 1:
        _logger.debug(f"running specs in parallel with {num_workers} workers")
        return parallel_runner_factory(project_base_dir, num_workers)

    return runner_factory(project_base_dir)


async def run_specs(
    runner_factory: RunnerFactoryType,
    parallel_runner_factory: ParallelRunnerFactoryType,
    project_base_dir: PathLikeType,
    options: ParsedOptions,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    if environ is None:
        environ = os.environ

    runner = create_runner(
        runner_factory,
        parallel_runner_factory,
        pathlib.Path(project_base_dir),
        options.num_workers,
    )

    await runner.load_config_file(options.config_path or environ.get(CONFIG_PATH_ENV))

    if options.fail_fast is not None:
        runner.configure_env(
            stop_spec_on_expectation_failure=options.fail_fast,
            stop_on_spec_failure=options.fail_fast,
        )

    if options.seed is not None:
        runner.seed(options.seed)

    if options.random is not None:
        runner.randomize_tests(options.random)

    if len(options.helpers) > 0:
        runner.add_matching_helper_files(list(options.helpers))

    if len(options.requires) > 0:
        runner.add_requires(list(options.requires))

    if options.reporter is not None:
        register_reporter(options.reporter, runner)

    runner.show_colors(options.color)

    try:
        return await runner.execute(list(options.files) or None, options.filter)
    except Exception:
        _logger.exception("an error occurred while running specs")
        return EXECUTION_ERROR_EXIT_CODE
