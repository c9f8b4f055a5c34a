"""
JSON file persistence for the comment collection.

The whole collection lives in a single JSON array.  ``load`` reads and
decodes all of it, ``save`` replaces all of it.  Writes go to a
temporary file in the same directory which is then moved over the
target with ``os.replace``, so readers see either the previous or the
new collection and never a partially written one.

Malformed content is never repaired: if the file is not a JSON array of
comment objects the whole load fails with ``StorageError``.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from comments_api.app.core.exceptions import StorageError
from comments_api.app.schemas.comment import Comment


logger = logging.getLogger(__name__)


class JsonFileStorage:
    """Whole-collection load/save backed by one JSON file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def initialize(self) -> None:
        """Create an empty collection if the file does not exist yet."""
        if self.path.exists():
            return
        logger.info("Comments file %s not found, creating an empty collection", self.path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.save([])

    def load(self) -> List[Comment]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to read comments file %s: %s", self.path, exc)
            raise StorageError(f"Comments storage is unreadable: {exc}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Comments file %s is not valid JSON: %s", self.path, exc)
            raise StorageError("Comments storage is corrupted") from exc

        if not isinstance(data, list):
            logger.error("Comments file %s does not hold a JSON array", self.path)
            raise StorageError("Comments storage is corrupted")

        comments: List[Comment] = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                logger.error("Record %d in %s is not an object", index, self.path)
                raise StorageError("Comments storage is corrupted")
            try:
                comments.append(Comment.model_validate(item))
            except ValidationError as exc:
                logger.error("Record %d in %s is malformed: %s", index, self.path, exc)
                raise StorageError("Comments storage is corrupted") from exc
        return comments

    def save(self, comments: List[Comment]) -> None:
        try:
            payload = json.dumps(
                [comment.model_dump() for comment in comments],
                ensure_ascii=False,
                indent=2,
            ).encode("utf-8")
        except (TypeError, ValueError) as exc:
            # Lone surrogates and unserializable values end up here.
            logger.error("Failed to encode comments for %s: %s", self.path, exc)
            raise StorageError(f"Comments could not be encoded: {exc}") from exc

        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            logger.error("Failed to write comments file %s: %s", self.path, exc)
            raise StorageError(f"Comments storage is not writable: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("Could not remove temporary file %s", tmp_name)
