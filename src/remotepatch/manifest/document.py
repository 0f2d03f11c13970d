"""Read, parse and serialize Cargo manifests without losing formatting."""

from __future__ import annotations

import logging
from pathlib import Path

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import ParseError, TOMLKitError

from remotepatch.errors import ManifestParseError, ManifestReadError
from remotepatch.util.paths import StrPath

LOGGER = logging.getLogger(__name__)


def read_manifest(manifest_path: StrPath) -> str:
    """Read manifest text. Raises ManifestReadError."""
    path = Path(manifest_path)
    LOGGER.debug("Reading manifest %s", path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestReadError(
            f"Cannot read manifest {path}",
            details={"manifest_path": str(path)},
            cause=exc,
        ) from exc


def parse_manifest(text: str) -> TOMLDocument:
    """Parse manifest text into an editable document. Raises ManifestParseError."""
    try:
        return tomlkit.parse(text)
    except TOMLKitError as exc:
        details = {}
        if isinstance(exc, ParseError):
            details = {"line": exc.line, "col": exc.col}
        raise ManifestParseError(
            f"Manifest is not valid TOML: {exc}",
            details=details,
            cause=exc,
        ) from exc


def dump_manifest(document: TOMLDocument) -> str:
    """Serialize the document; untouched content is reproduced as parsed."""
    return tomlkit.dumps(document)
