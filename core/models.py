# core/models.py
"""
Data model for captured survey points.

All records are immutable: a point is created once at capture time and only
ever removed from its collection, never edited in place.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class PointCategory(str, Enum):
    """Site-condition labels a surveyor can assign to a point."""
    INFRASTRUCTURE = "Infrastructure"
    VEGETATION = "Vegetation"
    HYDROGRAPHY = "Hydrography"
    CONTROL_POINT = "Control-Point"
    FLOODING = "Flooding"
    SINKHOLE = "Sinkhole"
    SUBSIDENCE = "Subsidence"
    CRACKING = "Cracking"
    OVERFLOW = "Overflow"
    LANDSLIDE = "Landslide"
    OTHER = "Other"

    @classmethod
    def labels(cls) -> list:
        return [category.value for category in cls]


@dataclass(frozen=True)
class GeographicPosition:
    """A WGS84 sample as delivered by the location provider."""

    latitude: float          # degrees
    longitude: float         # degrees
    accuracy: float = 0.0    # meters

    def to_dict(self) -> Dict[str, float]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "accuracy": self.accuracy,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeographicPosition":
        return cls(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            accuracy=float(data.get("accuracy", 0.0)),
        )


@dataclass(frozen=True)
class ProjectedCoordinate:
    """UTM coordinate derived from a GeographicPosition."""

    easting: float           # meters, hundredths
    northing: float          # meters, hundredths
    zone: int
    band: str

    @property
    def grid_zone(self) -> str:
        """Zone number and band letter, e.g. '14Q'."""
        return f"{self.zone}{self.band}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "easting": self.easting,
            "northing": self.northing,
            "zone": self.zone,
            "band": self.band,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectedCoordinate":
        return cls(
            easting=float(data["easting"]),
            northing=float(data["northing"]),
            zone=int(data["zone"]),
            band=str(data["band"]),
        )


@dataclass(frozen=True)
class CapturedPoint:
    """
    A surveyed point with its metadata.

    ``projected`` is always computed from ``position`` by the survey session
    at capture time. ``photo`` holds an embedded image as a data URL.
    """

    id: str
    name: str
    category: PointCategory
    characteristics: str
    observations: str
    captured_at: int         # epoch milliseconds
    position: GeographicPosition
    projected: ProjectedCoordinate
    photo: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the persisted JSON field names."""
        data = {
            "id": self.id,
            "name": self.name,
            "type": self.category.value,
            "characteristics": self.characteristics,
            "observations": self.observations,
            "timestamp": self.captured_at,
            "coords": self.position.to_dict(),
            "utm": self.projected.to_dict(),
        }
        if self.photo:
            data["photoBase64"] = self.photo
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CapturedPoint":
        """
        Rebuild a point from its persisted form.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field has the wrong shape or an unknown category
        """
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            category=PointCategory(data["type"]),
            characteristics=str(data.get("characteristics", "")),
            observations=str(data.get("observations", "")),
            captured_at=int(data["timestamp"]),
            position=GeographicPosition.from_dict(data["coords"]),
            projected=ProjectedCoordinate.from_dict(data["utm"]),
            photo=data.get("photoBase64"),
        )
