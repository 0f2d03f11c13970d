"""Exception hierarchy and rsync exit-code mapping for remotepatch."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence


class Stage(str, Enum):
    """Stage of a remotepatch run; every error names the stage that failed."""

    CONFIGURE = "configure"
    READ_MANIFEST = "read manifest"
    PARSE_MANIFEST = "parse manifest"
    LOCATE_WORKSPACE = "locate workspace"
    PLAN = "plan workspaces"
    TRANSFER_WORKSPACE = "transfer workspace"
    TRANSFER_MANIFEST = "transfer manifest"


class RemotePatchError(Exception):
    """
    Base exception for remotepatch.

    Attributes:
        details: Optional structured information (e.g., offending path, exit code).
        cause: Optional original exception that triggered this error.
        stage: The stage of the run that failed.
    """

    default_stage: Stage = Stage.CONFIGURE

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
        stage: Optional[Stage] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause
        self.stage = stage if stage is not None else self.default_stage


class InvalidArgumentError(RemotePatchError):
    """Raised when configuration or operation arguments are invalid."""


class ManifestReadError(RemotePatchError):
    """Raised when the manifest file cannot be read."""

    default_stage = Stage.READ_MANIFEST


class ManifestParseError(RemotePatchError):
    """Raised when the manifest text is not a valid TOML document."""

    default_stage = Stage.PARSE_MANIFEST


class WorkspaceNotFoundError(RemotePatchError):
    """Raised when no workspace root can be located for a patch path."""

    default_stage = Stage.LOCATE_WORKSPACE


class ConflictError(RemotePatchError):
    """Raised when two workspaces would be placed at the same remote folder."""

    default_stage = Stage.PLAN


class TransferError(RemotePatchError):
    """Raised when copying a workspace or the manifest to the build server fails."""

    default_stage = Stage.TRANSFER_WORKSPACE


class NetworkError(TransferError):
    """Raised when rsync cannot reach or keep talking to the build server."""


def describe_error(error: RemotePatchError) -> str:
    """Render an error for users as '<stage>: <message>'."""
    return f"{error.stage.value}: {error}"


@dataclass(frozen=True)
class ProcessErrorInfo:
    """Lightweight information about a failed external process."""

    returncode: int
    command: Sequence[str] = ()
    stderr: str | None = None


# Exit codes documented in rsync(1).
RSYNC_EXIT_REASONS: dict[int, str] = {
    1: "syntax or usage error",
    2: "protocol incompatibility",
    3: "errors selecting input/output files, dirs",
    4: "requested action not supported",
    5: "error starting client-server protocol",
    10: "error in socket I/O",
    11: "error in file I/O",
    12: "error in rsync protocol data stream",
    13: "errors with program diagnostics",
    14: "error in IPC code",
    20: "received SIGUSR1 or SIGINT",
    23: "partial transfer due to error",
    24: "partial transfer due to vanished source files",
    30: "timeout in data send/receive",
    35: "timeout waiting for daemon connection",
    255: "remote shell failed",
}

_NETWORK_EXIT_CODES: frozenset[int] = frozenset({5, 10, 12, 30, 35, 255})


def map_rsync_exit(
    info: ProcessErrorInfo,
    *,
    stage: Stage = Stage.TRANSFER_WORKSPACE,
    cause: Optional[BaseException] = None,
) -> TransferError:
    """
    Map a failed rsync invocation to a remotepatch exception.

    Policy:
        - 5, 10, 12, 30, 35, 255 -> NetworkError
        - otherwise -> TransferError
    """
    reason = RSYNC_EXIT_REASONS.get(info.returncode, "unknown error")
    details: dict[str, Any] = {
        "returncode": info.returncode,
        "reason": reason,
        "command": list(info.command),
    }
    if info.stderr:
        details["stderr"] = info.stderr

    message = f"rsync failed with exit code {info.returncode} ({reason})"

    if info.returncode in _NETWORK_EXIT_CODES:
        return NetworkError(message, details=details, cause=cause, stage=stage)
    return TransferError(message, details=details, cause=cause, stage=stage)
