"""Public plan exports for remotepatch."""

from __future__ import annotations

from .kinds import TransferKind
from .operation import TransferOperation
from .ordering import build_transfer_order
from .transfer_plan import TransferPlan

__all__ = [
    "TransferKind",
    "TransferOperation",
    "TransferPlan",
    "build_transfer_order",
]
