# core/survey_session.py
"""
Survey session: owns the ordered point collection and the current GPS fix.

The location provider pushes samples through ``update_position`` and reports
failures through ``position_lost``. Points can only be captured while a
fresh fix is available, and each point gets its UTM coordinate from the same
sample it was captured with.
"""

import time
import uuid
from datetime import timezone, tzinfo
from typing import Callable, List, Optional, Tuple

from constants import MSG_WAITING_GPS, MSG_GPS_UNKNOWN_ERROR
from core.exceptions import (
    InvalidCoordinateError,
    NoPositionError,
    PointNotFoundError,
    StorageError
)
from core.models import CapturedPoint, GeographicPosition, ProjectedCoordinate
from core.projection import project
from exporters.kml_exporter import KMLExporter
from utils.error_handler import log_and_describe_error
from utils.logger import get_logger
from utils.validators import validate_position, normalize_category, is_utm_latitude

logger = get_logger(__name__)


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def _new_point_id() -> str:
    return str(uuid.uuid4())


class SurveySession:
    def __init__(
        self,
        store=None,
        clock: Callable[[], int] = None,
        id_factory: Callable[[], str] = None,
        audit_projection: bool = False
    ):
        """
        Args:
            store: Object with load()/save(points); None keeps points in memory only
            clock: Returns the current time in epoch milliseconds
            id_factory: Returns a fresh unique point id
            audit_projection: Compare every projection against PROJ and log the difference
        """
        self.store = store
        self.clock = clock or _epoch_millis
        self.id_factory = id_factory or _new_point_id
        self.audit_projection = audit_projection

        self._points: List[CapturedPoint] = []
        self._position: Optional[GeographicPosition] = None
        self._projection: Optional[ProjectedCoordinate] = None
        self.last_error: Optional[str] = None

    # --- collection -------------------------------------------------------

    @property
    def points(self) -> Tuple[CapturedPoint, ...]:
        return tuple(self._points)

    def load(self) -> int:
        """Restore the persisted collection. Returns the number of points loaded."""
        if self.store is None:
            return 0
        self._points = list(self.store.load())
        return len(self._points)

    def _commit(self, points: List[CapturedPoint], action: str) -> None:
        """
        Replace the collection and persist it; on a storage failure the
        previous collection is restored and the advisory goes to last_error.
        """
        previous = self._points
        self._points = points
        if self.store is None:
            return

        try:
            self.store.save(self._points)
        except StorageError as e:
            self._points = previous
            self.last_error = log_and_describe_error(e, context=action)['message']
            raise

    def get_point(self, point_id: str) -> CapturedPoint:
        for point in self._points:
            if point.id == point_id:
                return point
        raise PointNotFoundError(point_id)

    def delete_point(self, point_id: str) -> CapturedPoint:
        """
        Remove a point from the collection.

        Raises:
            PointNotFoundError: If no point has this id
            StorageError: If the collection cannot be saved; the point is kept
        """
        point = self.get_point(point_id)
        self._commit([p for p in self._points if p.id != point_id], "delete")
        logger.info(f"Point deleted: {point_id} ({point.name})")
        return point

    # --- location ---------------------------------------------------------

    @property
    def current_position(self) -> Optional[GeographicPosition]:
        return self._position

    @property
    def current_projection(self) -> Optional[ProjectedCoordinate]:
        return self._projection

    @property
    def has_fix(self) -> bool:
        return self._position is not None

    def update_position(self, latitude, longitude, accuracy=0.0) -> ProjectedCoordinate:
        """
        Accept a location sample and project it.

        Raises:
            InvalidCoordinateError: If the sample is out of range or not finite;
                the previous fix is dropped in that case
        """
        try:
            position = validate_position(latitude, longitude, accuracy)
        except InvalidCoordinateError as e:
            self.position_lost(str(e))
            raise

        if not is_utm_latitude(position.latitude):
            logger.warning(
                f"Latitude {position.latitude} is outside the UTM range; band defaults may apply"
            )

        projection = project(position.latitude, position.longitude)

        if self.audit_projection:
            from utils.coordinate_systems import projection_discrepancy
            projection_discrepancy(position.latitude, position.longitude)

        self._position = position
        self._projection = projection
        self.last_error = None
        return projection

    def position_lost(self, reason: str = None) -> None:
        """Drop the current fix after a provider failure (no signal, denied, timeout)."""
        self._position = None
        self._projection = None
        self.last_error = f"Error GPS: {reason or MSG_GPS_UNKNOWN_ERROR}"
        logger.warning(self.last_error)

    # --- capture ----------------------------------------------------------

    def capture_point(
        self,
        name: str,
        category,
        characteristics: str = "",
        observations: str = "",
        photo: Optional[str] = None
    ) -> CapturedPoint:
        """
        Create a point at the current fix and add it to the front of the collection.

        Args:
            name: Point name
            category: PointCategory or label; unknown labels become "Other"
            characteristics: Free text
            observations: Free text
            photo: Optional image as a data URL

        Returns:
            The new CapturedPoint

        Raises:
            NoPositionError: If there is no current GPS fix
            StorageError: If the collection cannot be saved; nothing is added
        """
        if self._position is None or self._projection is None:
            raise NoPositionError(MSG_WAITING_GPS)

        point = CapturedPoint(
            id=self.id_factory(),
            name=name,
            category=normalize_category(category),
            characteristics=characteristics,
            observations=observations,
            captured_at=self.clock(),
            position=self._position,
            projected=self._projection,
            photo=photo,
        )

        self._commit([point] + self._points, "capture")
        logger.info(
            f"Point captured: {point.id} '{point.name}' [{point.category.value}] "
            f"{point.projected.grid_zone} E:{point.projected.easting} N:{point.projected.northing}"
        )
        return point

    # --- export -----------------------------------------------------------

    def export_kml(self, tz: tzinfo = timezone.utc) -> str:
        return KMLExporter.export(self._points, tz)
