import dataclasses
import pathlib
from typing import Any, Dict, List, Optional

import dacite
import tomlkit
import tomlkit.exceptions
import tomlkit.items

from .exceptions import ConfigFileNotFoundError, InvalidConfigurationError

CONFIG_PATH_ENV = "SPECRUN_CONFIG_PATH"
DEFAULT_CONFIG_PATH = pathlib.Path("spec/support/specrun.toml")


@dataclasses.dataclass
class EnvConfig:
    random: bool = True
    seed: Optional[str] = None
    stop_spec_on_expectation_failure: bool = False
    stop_on_spec_failure: bool = False


@dataclasses.dataclass
class RunnerConfig:
    spec_dir: str = "spec"
    spec_files: List[str] = dataclasses.field(
        default_factory=lambda: ["**/*[sS]pec.py"]
    )
    helpers: List[str] = dataclasses.field(
        default_factory=lambda: ["helpers/**/*.py"]
    )
    requires: List[str] = dataclasses.field(default_factory=list)
    env: EnvConfig = dataclasses.field(default_factory=EnvConfig)


def _workaround_tomlkit_unmarshal(data: Any) -> Any:
    if data is None or isinstance(data, tomlkit.items.Null):
        return None
    elif isinstance(data, dict):
        # tomlkit.items.Table, tomlkit.container.Container
        ret: Dict[str, Any] = {}
        for k, v in data.items():
            ret[str(k)] = _workaround_tomlkit_unmarshal(v)
        return ret
    elif isinstance(data, list):
        # tomlkit.items.Array
        return [_workaround_tomlkit_unmarshal(v) for v in data]
    elif isinstance(data, tomlkit.items.Bool):
        return bool(data.value)
    elif isinstance(data, tomlkit.items.Float):
        return float(data)
    elif isinstance(data, tomlkit.items.Integer):
        return int(data)
    elif isinstance(data, tomlkit.items.String):
        return str(data)
    elif isinstance(
        data, (tomlkit.items.DateTime, tomlkit.items.Date, tomlkit.items.Time)
    ):
        raise InvalidConfigurationError(f"unsupported value type: {type(data)}")

    return data


def _load_document(path: pathlib.Path) -> Dict[str, Any]:
    try:
        with path.open("r") as f:
            document = tomlkit.loads(f.read())
    except tomlkit.exceptions.TOMLKitError as e:
        raise InvalidConfigurationError(
            f"{path} is not a valid TOML file: {e}"
        ) from None

    data = _workaround_tomlkit_unmarshal(document)
    assert isinstance(data, dict)
    return data


def _coerce_seed(value: Any) -> Any:
    # seeds are opaque strings, but `seed = 4321` is a natural thing to write
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def parse_dict(data: Dict[str, Any]) -> RunnerConfig:
    env = data.get("env")
    if isinstance(env, dict) and "seed" in env:
        data = {**data, "env": {**env, "seed": _coerce_seed(env["seed"])}}

    try:
        config = dacite.from_dict(RunnerConfig, data, dacite.Config(strict=True))
        assert isinstance(config, RunnerConfig)
        return config
    except dacite.DaciteError as e:
        raise InvalidConfigurationError(f"invalid configuration: {e}") from None


def parse(path: pathlib.Path) -> RunnerConfig:
    return parse_dict(_load_document(path))


def find_config(
    base_dir: pathlib.Path, path: Optional[str] = None
) -> Optional[pathlib.Path]:
    """
    Returns the config file to load, or `None` when no path was requested and
    the default location does not hold one.
    """
    if path is not None:
        config_path = (base_dir / path).resolve()
        if not config_path.exists():
            raise ConfigFileNotFoundError(f"File not found: {config_path}")
        elif not config_path.is_file():
            raise ConfigFileNotFoundError(f"{config_path} is not a file")
        return config_path

    default = base_dir / DEFAULT_CONFIG_PATH
    if default.is_file():
        return default
    return None
