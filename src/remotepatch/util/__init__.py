from .ids import new_op_id, new_plan_id
from .paths import (
    is_within,
    join_remote,
    relative_parts,
    remote_folder_for,
    resolve_patch_path,
    to_remote_path,
)

__all__ = [
    "new_plan_id",
    "new_op_id",
    "is_within",
    "join_remote",
    "relative_parts",
    "remote_folder_for",
    "resolve_patch_path",
    "to_remote_path",
]
