"""Apply ordering rules for TransferPlan operations."""

from __future__ import annotations

from .kinds import TransferKind
from .operation import TransferOperation


def build_transfer_order(operations: list[TransferOperation]) -> list[str]:
    """
    Build apply_order from operations.

    Rules:
        - Workspace syncs run in seq order (first-discovery order).
        - The manifest copy runs after every workspace sync, whatever its seq,
          so the remote manifest never references a folder not copied yet.
    """
    ops = sorted(operations, key=lambda op: op.seq)
    syncs = [op for op in ops if op.kind is not TransferKind.COPY_MANIFEST]
    manifests = [op for op in ops if op.kind is TransferKind.COPY_MANIFEST]
    return [op.op_id for op in syncs + manifests]
