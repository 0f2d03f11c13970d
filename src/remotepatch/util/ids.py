from __future__ import annotations

import uuid


def new_plan_id() -> str:
    """Generate a new TransferPlan ID."""
    return str(uuid.uuid4())


def new_op_id() -> str:
    """Generate a new TransferOperation ID."""
    return str(uuid.uuid4())
