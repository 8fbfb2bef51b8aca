# storage/point_store.py
"""
Persistence of the captured point collection.

The collection is stored as a single JSON array under an application-scoped
key; with JSONPointStore the key becomes the file name inside the data
directory. It is loaded once at startup and saved on every mutation.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import List, Sequence

from constants import APP_DATA_DIR_NAME, STORAGE_KEY, STORAGE_FILE_EXTENSION
from core.exceptions import StorageError
from core.models import CapturedPoint
from utils.logger import get_logger

logger = get_logger(__name__)


def default_data_dir() -> Path:
    return Path.home() / APP_DATA_DIR_NAME / "data"


class InMemoryPointStore:
    """Keeps the serialized collection in memory (tests, throwaway sessions)."""

    def __init__(self, key: str = STORAGE_KEY):
        self.key = key
        self._payload = None

    def load(self) -> List[CapturedPoint]:
        if self._payload is None:
            return []
        return [CapturedPoint.from_dict(record) for record in json.loads(self._payload)]

    def save(self, points: Sequence[CapturedPoint]) -> None:
        self._payload = json.dumps([p.to_dict() for p in points], ensure_ascii=False)


class JSONPointStore:
    """
    Stores the collection as ``<data_dir>/<key>.json``.

    Args:
        data_dir: Folder holding the file (default: ~/.geosmart/data)
        key: Application-scoped storage key
    """

    def __init__(self, data_dir=None, key: str = STORAGE_KEY):
        self.data_dir = Path(data_dir) if data_dir is not None else default_data_dir()
        self.key = key

    @property
    def path(self) -> Path:
        return self.data_dir / f"{self.key}{STORAGE_FILE_EXTENSION}"

    def load(self) -> List[CapturedPoint]:
        """
        Read the stored collection.

        Returns:
            Points in stored order; an empty list if nothing was saved yet

        Raises:
            StorageError: If the file cannot be read or does not hold a valid point array
        """
        if not self.path.exists():
            logger.info(f"No stored points at {self.path}")
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing point store {self.path}: {e}")
            raise StorageError("El archivo de puntos está dañado", details=str(e)) from e
        except OSError as e:
            logger.error(f"Error reading point store {self.path}: {e}")
            raise StorageError("No se pudo leer el archivo de puntos", details=str(e)) from e

        if not isinstance(data, list):
            raise StorageError(
                "El archivo de puntos debe contener una lista",
                details=type(data).__name__
            )

        points = []
        for i, record in enumerate(data):
            try:
                points.append(CapturedPoint.from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Invalid point record #{i} in {self.path}: {e!r}")
                raise StorageError(f"Registro de punto inválido (#{i})", details=repr(e)) from e

        logger.info(f"Loaded {len(points)} points from {self.path}")
        return points

    def save(self, points: Sequence[CapturedPoint]) -> None:
        """
        Write the whole collection, replacing the previous file atomically.

        Raises:
            StorageError: If the file cannot be written
        """
        payload = [p.to_dict() for p in points]
        tmp_name = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.key}-", suffix=".tmp", dir=str(self.data_dir)
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error(f"Error saving point store {self.path}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise StorageError("No se pudieron guardar los puntos", details=str(e)) from e

        logger.debug(f"Saved {len(payload)} points to {self.path}")
