"""Manifest editing: patch extraction and rewrite planning."""

from __future__ import annotations

from .document import dump_manifest, parse_manifest, read_manifest
from .patch_fields import PatchPathField, extract_patch_fields
from .planner import PatchPlanner, WorkspaceLocator, plan_patches

__all__ = [
    "read_manifest",
    "parse_manifest",
    "dump_manifest",
    "PatchPathField",
    "extract_patch_fields",
    "PatchPlanner",
    "WorkspaceLocator",
    "plan_patches",
]
