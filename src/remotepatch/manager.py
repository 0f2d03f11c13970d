"""RemotePatchManager: orchestrates manifest planning and transfer to the build server."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from remotepatch.config import RemoteBuildConfig
from remotepatch.errors import InvalidArgumentError, RemotePatchError, TransferError
from remotepatch.locator import CargoWorkspaceLocator
from remotepatch.manifest import (
    WorkspaceLocator,
    dump_manifest,
    extract_patch_fields,
    parse_manifest,
    plan_patches,
    read_manifest,
)
from remotepatch.models import OperationResult, TransferResult, WorkspaceProject
from remotepatch.plan import TransferKind, TransferOperation, TransferPlan, build_transfer_order
from remotepatch.transfer import RsyncCopier
from remotepatch.util.ids import new_op_id, new_plan_id
from remotepatch.util.paths import StrPath

LOGGER = logging.getLogger(__name__)


@dataclass
class _ApplyContext:
    manifest_file: Optional[str] = None
    results: list[OperationResult] = field(default_factory=list)


class RemotePatchManager:
    """
    High-level entry point: Plan -> Apply.

    Collaborators:
        locator: callable mapping a path to its workspace root.
        copier: object with sync_directory(local, remote) and
            copy_file(local, remote); remote paths are relative to the
            remote build directory.
    """

    def __init__(self, config: RemoteBuildConfig) -> None:
        self._config = config
        self._locator: WorkspaceLocator = CargoWorkspaceLocator()
        self._copier: Any = RsyncCopier(config)

    @classmethod
    def from_collaborators(
        cls,
        config: RemoteBuildConfig,
        *,
        locator: WorkspaceLocator,
        copier: Any,
    ) -> "RemotePatchManager":
        """Create manager with injected locator and copier (useful for tests)."""
        obj = cls.__new__(cls)
        obj._config = config
        obj._locator = locator
        obj._copier = copier
        return obj

    @property
    def config(self) -> RemoteBuildConfig:
        return self._config

    def handle_patches(self, manifest_path: StrPath) -> TransferResult:
        """
        Prepare and upload a manifest with local patches.

        Steps:
            1. Read and parse the manifest
            2. Collect `path` entries under [patch.*] (none -> nothing to do)
            3. Find each patched crate's workspace, once per workspace
            4. Rewrite the paths to '../<workspace>/...'
            5. rsync every workspace, then the rewritten manifest
        """
        path = Path(manifest_path)
        text = read_manifest(path)
        plan = self.build_plan(text, base_dir=path.resolve().parent)
        return self.apply_plan(plan)

    def build_plan(self, manifest_text: str, *, base_dir: Optional[StrPath] = None) -> TransferPlan:
        """
        Build a TransferPlan from manifest text (no transfers).

        Relative patch paths are resolved against base_dir. Without a
        `patch` table the plan is empty and keeps the text unchanged.
        """
        document = parse_manifest(manifest_text)
        fields = extract_patch_fields(document)
        if fields is None:
            return TransferPlan(
                plan_id=new_plan_id(),
                manifest_text=manifest_text,
                has_patches=False,
            )

        workspaces = plan_patches(fields, self._locator, base_dir=base_dir)
        operations = _build_operations(workspaces, self._config.manifest_name)
        return TransferPlan(
            plan_id=new_plan_id(),
            manifest_text=dump_manifest(document),
            workspaces=workspaces,
            operations=operations,
            apply_order=build_transfer_order(operations),
        )

    def apply_plan(self, plan: TransferPlan) -> TransferResult:
        """
        Apply a TransferPlan to the build server.

        Policy:
            - Operations run one after another in apply_order.
            - The first failure is raised; completed operations are listed in
              error.details["completed"]. Nothing is rolled back.
        """
        if not plan.has_patches:
            LOGGER.debug("No patches in project; nothing to transfer.")
            return TransferResult(status="skipped", summary={"success": 0})

        ops_by_id = _index_operations(plan.operations)
        _validate_apply_order(plan.apply_order, ops_by_id)

        ctx = _ApplyContext()
        try:
            for op_id in plan.apply_order:
                op = ops_by_id[op_id]
                try:
                    op.validate_required_fields()
                except ValueError as exc:
                    raise InvalidArgumentError(
                        "Invalid operation: missing required fields",
                        details={"op_id": op.op_id, "kind": op.kind.value},
                        cause=exc,
                    ) from exc

                try:
                    destination = self._apply_one(op, plan, ctx)
                except RemotePatchError as exc:
                    exc.details["completed"] = [r.op_id for r in ctx.results]
                    raise
                ctx.results.append(_success_result(op, destination))
        finally:
            _remove_manifest_file(ctx)

        return TransferResult(
            status="success",
            results=ctx.results,
            workspaces=list(plan.workspaces),
            summary=_summarize_results(ctx.results),
        )

    # ----------------------------
    # Internals
    # ----------------------------
    def _apply_one(self, op: TransferOperation, plan: TransferPlan, ctx: _ApplyContext) -> str:
        """Apply one operation. Raises remotepatch errors on failure."""
        if op.kind is TransferKind.SYNC_WORKSPACE:
            LOGGER.info("Copying workspace %s to the build server.", op.name)
            return self._copier.sync_directory(op.local_path, op.remote_path)

        if op.kind is TransferKind.COPY_MANIFEST:
            local_file = _write_manifest_file(plan.manifest_text, ctx)
            LOGGER.info("Copying patched %s to the build server.", self._config.manifest_name)
            return self._copier.copy_file(local_file, op.remote_path)

        raise InvalidArgumentError("Unsupported kind", details={"kind": op.kind})


def _build_operations(workspaces: list[WorkspaceProject], manifest_name: str) -> list[TransferOperation]:
    operations = [
        TransferOperation(
            op_id=new_op_id(),
            seq=seq,
            kind=TransferKind.SYNC_WORKSPACE,
            name=project.name,
            local_path=str(project.local_path),
            remote_path=project.remote_path.as_posix(),
        )
        for seq, project in enumerate(workspaces)
    ]
    operations.append(
        TransferOperation(
            op_id=new_op_id(),
            seq=len(operations),
            kind=TransferKind.COPY_MANIFEST,
            name=manifest_name,
            remote_path=manifest_name,
        )
    )
    return operations


def _write_manifest_file(manifest_text: str, ctx: _ApplyContext) -> str:
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            suffix=".toml",
            delete=False,
        ) as f:
            f.write(manifest_text)
    except OSError as exc:
        raise TransferError(
            "Unable to write the patched manifest to a temporary file",
            cause=exc,
            stage=TransferKind.COPY_MANIFEST.stage,
        ) from exc
    ctx.manifest_file = f.name
    return f.name


def _remove_manifest_file(ctx: _ApplyContext) -> None:
    if ctx.manifest_file is None:
        return
    try:
        os.remove(ctx.manifest_file)
    except OSError:
        LOGGER.warning("Could not remove temporary manifest %s", ctx.manifest_file)
    ctx.manifest_file = None


def _index_operations(operations: list[TransferOperation]) -> dict[str, TransferOperation]:
    ops_by_id: dict[str, TransferOperation] = {}
    for op in operations:
        if op.op_id in ops_by_id:
            raise InvalidArgumentError("Duplicate op_id in plan", details={"op_id": op.op_id})
        ops_by_id[op.op_id] = op
    return ops_by_id


def _validate_apply_order(apply_order: list[str], ops_by_id: dict[str, TransferOperation]) -> None:
    for op_id in apply_order:
        if op_id not in ops_by_id:
            raise InvalidArgumentError(
                "apply_order contains unknown op_id",
                details={"op_id": op_id},
            )


def _success_result(op: TransferOperation, destination: Optional[str]) -> OperationResult:
    return OperationResult(
        op_id=op.op_id,
        seq=op.seq,
        kind=op.kind.value,
        status="success",
        destination=destination,
    )


def _summarize_results(results: list[OperationResult]) -> dict[str, int]:
    summary: dict[str, int] = {"success": 0}
    for r in results:
        summary[r.status] = summary.get(r.status, 0) + 1
        summary[r.kind] = summary.get(r.kind, 0) + 1
    return summary
