"""Build server configuration for remotepatch."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from remotepatch.errors import InvalidArgumentError

ENV_BUILD_SERVER = "REMOTEPATCH_BUILD_SERVER"
ENV_BUILD_PATH = "REMOTEPATCH_BUILD_PATH"

DEFAULT_MANIFEST_NAME = "Cargo.toml"
DEFAULT_EXCLUDES: tuple[str, ...] = ("target", ".*")
DEFAULT_PROGRESS_FLAG = "--info=progress2"


@dataclass(slots=True, frozen=True)
class RemoteBuildConfig:
    """
    Where and how patched workspaces are copied.

    build_server is an rsync/ssh destination host (e.g. "user@builder").
    build_path is the remote build directory; workspaces land next to it
    ('<build_path>/../<name>') and the manifest inside it.
    """

    build_server: str
    build_path: str
    manifest_name: str = DEFAULT_MANIFEST_NAME
    excludes: tuple[str, ...] = DEFAULT_EXCLUDES
    compress: bool = True
    progress_flag: Optional[str] = DEFAULT_PROGRESS_FLAG
    rsync: str = "rsync"

    def __post_init__(self) -> None:
        for key in ("build_server", "build_path", "manifest_name", "rsync"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise InvalidArgumentError(
                    f"RemoteBuildConfig.{key} must be a non-empty string",
                    details={key: value},
                )

        if ":" in self.build_server and not self.build_server.startswith("["):
            raise InvalidArgumentError(
                "RemoteBuildConfig.build_server must be a host, not a host:path",
                details={"build_server": self.build_server},
            )

        if not isinstance(self.excludes, tuple) or not all(
            isinstance(e, str) and e for e in self.excludes
        ):
            raise InvalidArgumentError(
                "RemoteBuildConfig.excludes must be a tuple of non-empty strings"
            )

    @property
    def remote_manifest_path(self) -> str:
        """Remote path of the manifest inside the build directory."""
        return f"{self.build_path.rstrip('/')}/{self.manifest_name}"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        build_server: Optional[str] = None,
        build_path: Optional[str] = None,
    ) -> RemoteBuildConfig:
        """Build a config from explicit values, falling back to environment variables."""
        env = os.environ if environ is None else environ
        server = build_server or env.get(ENV_BUILD_SERVER, "").strip()
        path = build_path or env.get(ENV_BUILD_PATH, "").strip()
        if not server:
            raise InvalidArgumentError(
                f"No build server given (use --build-server or {ENV_BUILD_SERVER})"
            )
        if not path:
            raise InvalidArgumentError(
                f"No build path given (use --build-path or {ENV_BUILD_PATH})"
            )
        return cls(build_server=server, build_path=path)
