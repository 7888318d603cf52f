# core/gradebook_store.py

"""
A JSON file store holding one gradebook document per course.

Documents are keyed by the course key `"{course_name}({course_code})"` and written whole on every
save; there are no partial writes. Two sessions saving the same course overwrite each other and the
last write wins.

The store only moves documents; the shape of a document is owned by `core.serializer`.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from urllib.parse import quote

from core.response import ErrorCode, Response
from core.serializer import from_storage, to_storage
from models.gradebook import Gradebook

logger = logging.getLogger(__name__)


def course_key(course_name: str, course_code: str) -> str:
    return f"{course_name.strip()}({course_code.strip()})"


class JsonGradebookStore:

    def __init__(self, dir_path: str):
        self._dir_path = dir_path

    # === properties ===

    @property
    def dir_path(self) -> str:
        return self._dir_path

    # === data accessors ===

    def document_path(self, key: str) -> str:
        # percent-encoding is reversible, so distinct course keys never share a file
        filename = quote(key, safe="()")
        return os.path.join(self._dir_path, f"{filename}.json")

    def exists(self, key: str) -> bool:
        return os.path.isfile(self.document_path(key))

    def load(self, key: str) -> Response:
        """
        Loads and deserializes the gradebook stored under `key`.

        Args:
            key (str): The course key, as built by `course_key()`.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the document was loaded, or if no document exists yet.
                    - False for JSON decoding issues, invalid field values, or missing fields.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_INPUT` if the file is not valid JSON.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the document has invalid values.
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if a required field is missing.
                    - `ErrorCode.INTERNAL_ERROR` if the file cannot be read.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "gradebook" (Gradebook | None): The loaded gradebook, or None if the course
                          has no stored document. The caller decides how to default it.

        Notes:
            - This method is read-only and does not raise.
        """
        path = self.document_path(key)

        if not os.path.isfile(path):
            logger.info("No gradebook stored for %s", key)
            return Response.succeed(data={"gradebook": None})

        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)

            gradebook = from_storage(document)

        except json.JSONDecodeError as e:
            logger.error("Gradebook for %s is not valid JSON: %s", key, e)
            return Response.fail(
                detail=f"Failed to parse JSON data: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except ValueError as e:
            logger.error("Gradebook for %s has invalid values: %s", key, e)
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except (KeyError, TypeError) as e:
            logger.error("Gradebook for %s is missing a field: %s", key, e)
            return Response.fail(
                detail=f"Missing required field: {e}",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        except OSError as e:
            logger.exception("Failed to read gradebook for %s", key)
            return Response.fail(
                detail=f"Failed to read data from disk: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        logger.info(
            "Loaded gradebook for %s (%d columns, %d students)",
            key,
            gradebook.column_count,
            len(gradebook.students),
        )

        return Response.succeed(data={"gradebook": gradebook})

    # === persistence ===

    def save(self, key: str, gradebook: Gradebook) -> Response:
        """
        Serializes `gradebook` and replaces the document stored under `key`.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the document was written.
                - detail (str | None): A confirmation on success, the error description on failure.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if the gradebook holds a value that cannot be stored.
                    - `ErrorCode.INTERNAL_ERROR` if the file cannot be written.
                - status_code (int | None): 200 on success, 400 on failure.
                - data (dict | None): Always empty.

        Notes:
            - The document is written to a temporary file and moved into place, so a reader never
              sees a half-written document.
            - Marks the gradebook as saved on success.
        """
        try:
            document = to_storage(gradebook)
            os.makedirs(self._dir_path, exist_ok=True)

            fd, temp_path = tempfile.mkstemp(dir=self._dir_path, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2, sort_keys=True, ensure_ascii=False)

                os.replace(temp_path, self.document_path(key))

            except BaseException:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise

        except (TypeError, ValueError) as e:
            logger.error("Gradebook for %s could not be serialized: %s", key, e)
            return Response.fail(
                detail=f"Object not JSON serializable: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except OSError as e:
            logger.exception("Failed to write gradebook for %s", key)
            return Response.fail(
                detail=f"Failed to write data to disk: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        gradebook.mark_saved()
        logger.info("Saved gradebook for %s", key)

        return Response.succeed(detail="Gradebook successfully saved.")
