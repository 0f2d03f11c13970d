"""Find local-path patch entries in a manifest document."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, Optional

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.items import String

LOGGER = logging.getLogger(__name__)

PATH_KEY = "path"


@dataclass(slots=True)
class PatchPathField:
    """
    Handle to one `path = "..."` entry under `patch.<source>.<crate>`.

    replace() writes into the owning table, so the change shows up when the
    document is serialized. Only meaningful while the document is alive.
    """

    source: str
    crate: str
    container: MutableMapping[str, Any] = field(repr=False)

    @property
    def value(self) -> str:
        return str(self.container[PATH_KEY])

    def replace(self, new_value: str) -> None:
        self.container[PATH_KEY] = _string_like(self.container[PATH_KEY], new_value)


def extract_patch_fields(document: TOMLDocument) -> Optional[list[PatchPathField]]:
    """
    Collect every local-path patch entry, in document order.

    Returns:
        None if the manifest has no `patch` table (nothing to do), otherwise
        the list of fields (possibly empty).

    Entries without a string `path` key (e.g. `git = "..."`) are skipped
    and left untouched; other keys next to `path` are ignored.
    """
    patch = document.get("patch")
    if not isinstance(patch, MutableMapping):
        LOGGER.debug("No patches in manifest.")
        return None

    fields: list[PatchPathField] = []
    for source, crates in patch.items():
        if not isinstance(crates, MutableMapping):
            continue
        for crate, entry in crates.items():
            if not isinstance(entry, MutableMapping):
                continue
            if not isinstance(entry.get(PATH_KEY), str):
                continue
            fields.append(PatchPathField(source=str(source), crate=str(crate), container=entry))

    LOGGER.debug("Found %d local patch path(s).", len(fields))
    return fields


def _string_like(old: object, new_value: str) -> String:
    # Keep literal ('...') quoting when the new value allows it.
    if (
        isinstance(old, String)
        and old.as_string().startswith("'")
        and "'" not in new_value
        and "\n" not in new_value
    ):
        return tomlkit.string(new_value, literal=True)
    return tomlkit.string(new_value)
