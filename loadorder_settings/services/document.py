"""Reading and writing settings documents."""

import json
import os
import uuid
from pathlib import Path
from typing import Any, Protocol

import structlog

from .errors import DocumentParseError, DocumentWriteError, FileSystemError

log = structlog.stdlib.get_logger()


class DocumentReader(Protocol):
    """Reads a settings document into a tree of mappings, sequences and scalars."""

    def read(self, path: Path) -> dict[str, Any]: ...


class DocumentWriter(Protocol):
    """Writes a tree of mappings, sequences and scalars to a settings document."""

    def write(self, data: dict[str, Any], path: Path) -> None: ...


class JsonDocument:
    """Settings documents stored as JSON objects.

    Writes go to a uniquely named temporary file beside the target, which is
    then moved over the target, so readers only ever see a complete document.
    """

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def read(self, path: Path) -> dict[str, Any]:
        """Load a document.

        Args:
            path: Path of the document

        Returns:
            The document's root object

        Raises:
            DocumentParseError: If the file is not valid JSON or its root is not an object
            FileSystemError: If the file cannot be read
        """
        log.debug("Reading settings document", path=str(path))

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            log.debug("Invalid JSON in settings document", path=str(path), error=str(e))
            raise DocumentParseError(
                f"The settings file is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
                path=path,
                original_error=e,
            ) from e
        except UnicodeDecodeError as e:
            raise DocumentParseError(
                "The settings file is not valid UTF-8 text.",
                path=path,
                original_error=e,
            ) from e
        except OSError as e:
            raise FileSystemError(
                "The settings file could not be read.",
                original_error=e,
                path=path,
                operation="load",
            ) from e

        if not isinstance(data, dict):
            raise DocumentParseError(
                f"Expected the settings file to hold a JSON object, got {type(data).__name__}",
                path=path,
                expected="a JSON object",
            )

        return data

    def write(self, data: dict[str, Any], path: Path) -> None:
        """Replace a document atomically.

        Args:
            data: Root object to write
            path: Path of the document

        Raises:
            DocumentWriteError: If the document could not be written; the
                previous file, if any, is left in place
        """
        temp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        log.debug("Writing settings document", path=str(path), temp_path=str(temp_path))

        try:
            text = json.dumps(data, indent=self.indent, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise DocumentWriteError(
                f"The settings could not be serialised: {e}",
                path=path,
                original_error=e,
            ) from e

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, 'w', encoding='utf-8') as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, path)
        except (OSError, UnicodeEncodeError) as e:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                log.debug("Could not remove temporary settings file", temp_path=str(temp_path))
            raise DocumentWriteError(
                "The settings file could not be saved.",
                path=path,
                original_error=e,
            ) from e

        log.debug("Settings document written", path=str(path), size=len(text))
