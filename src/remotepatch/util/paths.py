from __future__ import annotations

import os
import posixpath
from pathlib import Path, PurePath, PurePosixPath
from typing import Optional, Union

StrPath = Union[str, "os.PathLike[str]"]


def resolve_patch_path(value: StrPath, base_dir: Optional[StrPath] = None) -> Path:
    """
    Turn a manifest `path` value into a normalized local path.

    Relative values are resolved against base_dir (the manifest directory),
    the same way Cargo resolves them. Normalization is lexical only; the
    path does not need to exist.
    """
    path = Path(value)
    if not path.is_absolute() and base_dir is not None:
        path = Path(base_dir) / path
    return Path(os.path.normpath(path))


def is_within(path: PurePath, root: PurePath) -> bool:
    """
    Return True if path equals root or lies below it.

    Compares path components, so '/foo/bar2' is not within '/foo/bar'.
    """
    root_parts = root.parts
    return path.parts[: len(root_parts)] == root_parts


def relative_parts(path: PurePath, root: PurePath) -> tuple[str, ...]:
    """Return the components of path below root. Raises ValueError if outside."""
    if not is_within(path, root):
        raise ValueError(f"{path} is not inside {root}")
    return path.parts[len(root.parts):]


def remote_folder_for(name: str) -> PurePosixPath:
    """Remote folder of a workspace, relative to the remote build directory."""
    return PurePosixPath("..") / name


def to_remote_path(remote_root: PurePosixPath, parts: tuple[str, ...]) -> str:
    """Join remote_root and local path parts with forward slashes."""
    return remote_root.joinpath(*parts).as_posix()


def join_remote(build_path: str, remote_path: StrPath) -> str:
    """
    Place remote_path relative to the remote build directory.

    '~/builds/proj' + '../dep' -> '~/builds/dep'. A leading '~' is kept
    so the remote shell can expand it, and '..' never cancels it:
    '~' + '../dep' -> '~/../dep'.
    """
    joined = posixpath.join(build_path, os.fspath(remote_path))
    if joined == "~" or joined.startswith("~/"):
        rest = posixpath.normpath(joined[2:] or ".")
        return "~" if rest == "." else f"~/{rest}"
    return posixpath.normpath(joined)
