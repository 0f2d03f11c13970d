"""Workspace locator exports for remotepatch."""

from __future__ import annotations

from .cargo import CargoWorkspaceLocator

__all__ = ["CargoWorkspaceLocator"]
