import contextlib
import os
import pathlib
from typing import Iterator, Union

PathLikeType = Union[pathlib.Path, str]

_RELATIVE_PREFIXES = ("./", "../")


def wrap_path(s: PathLikeType) -> pathlib.Path:
    if isinstance(s, pathlib.Path):
        return s
    return pathlib.Path(s)


def unwindows(path: str) -> str:
    """
    Converts a Windows style path into the forward-slash form the runners expect.
    A drive letter is kept as is, e.g. `C:\\foo\\bar` becomes `C:/foo/bar`.
    """
    return path.replace("\\", "/")


def is_relative_path(s: str) -> bool:
    return s.startswith(_RELATIVE_PREFIXES)


@contextlib.contextmanager
def change_dir(dst: pathlib.Path) -> Iterator[None]:
    old = pathlib.Path.cwd()
    try:
        os.chdir(dst)
        yield
    finally:
        os.chdir(old)
