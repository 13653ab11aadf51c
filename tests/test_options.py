from unittest import mock

import pytest

from specrun.options import ParsedOptions, is_file_arg, parse_options

PARALLEL_ERROR = "Argument to --parallel= must be an integer greater than 1"


def test_parse_options_defaults() -> None:
    options = parse_options([], color=False)
    assert options == ParsedOptions(color=False)
    assert options.num_workers == 1
    assert options.files == ()
    assert options.helpers == ()
    assert options.requires == ()
    assert options.usage_errors == ()
    assert options.config_path is None
    assert options.filter is None
    assert options.fail_fast is None
    assert options.random is None
    assert options.seed is None
    assert options.reporter is None


def test_parse_options_color_default() -> None:
    with mock.patch("sys.stdout.isatty", return_value=True):
        assert parse_options([]).color

    with mock.patch("sys.stdout.isatty", return_value=False):
        assert not parse_options([]).color


def test_parse_options_color_last_wins() -> None:
    assert not parse_options(["--color", "--no-color"], color=True).color
    assert parse_options(["--no-color", "--color"], color=False).color
    assert parse_options(["--color"], color=False).color
    assert not parse_options(["--no-color"], color=True).color


def test_parse_options_value_flags() -> None:
    options = parse_options(
        [
            "--filter=player",
            "--seed=4321",
            "--config=spec/support/custom.toml",
            "--reporter=./reporter.py",
            "--random=false",
            "--fail-fast",
        ],
        color=False,
    )
    assert options.filter == "player"
    assert options.seed == "4321"
    assert options.config_path == "spec/support/custom.toml"
    assert options.reporter == "./reporter.py"
    assert options.random is False
    assert options.fail_fast is True
    assert options.usage_errors == ()


def test_parse_options_overwrite_last_wins() -> None:
    options = parse_options(
        ["--filter=a", "--filter=b", "--seed=1", "--seed=2", "--random=true"],
        color=False,
    )
    assert options.filter == "b"
    assert options.seed == "2"
    assert options.random is True

    options = parse_options(["--random=true", "--random=yes"], color=False)
    assert options.random is False


def test_parse_options_values_keep_equals_signs() -> None:
    options = parse_options(["--filter=a=b", "--config="], color=False)
    assert options.filter == "a=b"
    assert options.config_path == ""


def test_parse_options_repeatable_flags() -> None:
    options = parse_options(
        ["--helper=a", "--require=x", "--helper=b", "--require=y"], color=False
    )
    assert options.helpers == ("a", "b")
    assert options.requires == ("x", "y")


def test_parse_options_parallel() -> None:
    options = parse_options(["--parallel=2"], color=False)
    assert options.num_workers == 2
    assert options.usage_errors == ()

    options = parse_options(["--parallel=3", "--parallel=5"], color=False)
    assert options.num_workers == 5

    with mock.patch("os.cpu_count", return_value=8):
        options = parse_options(["--parallel=auto"], color=False)
    assert options.num_workers == 7
    assert options.usage_errors == ()

    assert parse_options(["--parallel=auto"], color=False).num_workers >= 1


@pytest.mark.parametrize("value", ["1", "abc", "2.5", "0", "-2", ""])
def test_parse_options_parallel_invalid(value: str) -> None:
    options = parse_options([f"--parallel={value}"], color=False)
    assert options.usage_errors == (PARALLEL_ERROR,)
    assert options.num_workers == 1


def test_parse_options_parallel_invalid_keeps_previous_value() -> None:
    options = parse_options(["--parallel=4", "--parallel=1"], color=False)
    assert options.usage_errors == (PARALLEL_ERROR,)
    assert options.num_workers == 4


def test_parse_options_files() -> None:
    options = parse_options(
        ["spec/a_spec.py", "--no-color", "spec/b_spec.py", "--seed=1", "c_spec.py"],
        color=True,
    )
    assert options.files == ("spec/a_spec.py", "spec/b_spec.py", "c_spec.py")
    assert not options.color
    assert options.seed == "1"


def test_parse_options_windows_paths() -> None:
    options = parse_options(["spec\\foo\\a_spec.py"], is_windows=True, color=False)
    assert options.files == ("spec/foo/a_spec.py",)

    options = parse_options(["spec\\foo\\a_spec.py"], is_windows=False, color=False)
    assert options.files == ("spec\\foo\\a_spec.py",)


def test_parse_options_environment_variables() -> None:
    options = parse_options(["FOO=bar", "index_spec.py", "A=B=C"], color=False)
    assert options.files == ("index_spec.py",)
    assert options.usage_errors == ()


def test_parse_options_end_of_options() -> None:
    options = parse_options(
        ["a_spec.py", "--", "b_spec.py", "--seed=3", "--unknown", "--parallel=1"],
        color=False,
    )
    assert options.files == ("a_spec.py",)
    assert options.seed is None
    assert options.num_workers == 1
    assert options.usage_errors == ()


def test_parse_options_unknown_options() -> None:
    options = parse_options(
        ["--foo", "a_spec.py", "--bar=1", "--filter", "--parallel"], color=False
    )
    assert options.files == ("a_spec.py",)
    assert options.usage_errors == (
        "Unknown options: --foo, --bar=1, --filter, --parallel",
    )


def test_parse_options_collects_every_usage_error() -> None:
    options = parse_options(["--parallel=abc", "--what", "--parallel=1"], color=False)
    assert options.usage_errors == (
        PARALLEL_ERROR,
        PARALLEL_ERROR,
        "Unknown options: --what",
    )


def test_parsed_options_are_frozen() -> None:
    options = parse_options(["--helper=a"], color=False)
    with pytest.raises(AttributeError):
        options.color = True  # type: ignore[misc]


def test_is_file_arg() -> None:
    assert is_file_arg("index_spec.py")
    assert is_file_arg("-x")
    assert not is_file_arg("--x")
    assert not is_file_arg("FOO=bar")
