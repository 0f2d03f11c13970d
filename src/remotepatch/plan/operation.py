"""Transfer operation model (explicit fields; no args dict)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .kinds import TransferKind


@dataclass(slots=True)
class TransferOperation:
    """
    A single copy within a TransferPlan.

    SYNC_WORKSPACE mirrors a workspace directory to remote_path (relative to
    the remote build directory). COPY_MANIFEST uploads the rewritten manifest
    to remote_path; its local file is created at apply time, so local_path
    stays empty in the plan.
    """

    op_id: str
    seq: int
    kind: TransferKind

    name: Optional[str] = None
    local_path: Optional[str] = None
    remote_path: Optional[str] = None

    def validate_required_fields(self) -> None:
        """Validate required fields according to kind. Raises ValueError."""
        if self.kind is TransferKind.SYNC_WORKSPACE:
            _require(self.name, "name")
            _require(self.local_path, "local_path")
            _require(self.remote_path, "remote_path")
            return

        if self.kind is TransferKind.COPY_MANIFEST:
            _require(self.remote_path, "remote_path")
            return

        raise ValueError(f"Unsupported kind: {self.kind}")


def _require(value: object, field_name: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"Missing required field: {field_name}")
