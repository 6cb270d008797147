"""
Read-only sample data served by the reminders and map endpoints.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from travel_proxy.models.responses import MapData, ReminderRecord


SAMPLE_REMINDERS: Tuple[Mapping[str, Any], ...] = (
    {
        "id": "1",
        "type": "flight",
        "title": "Flight Check-in Opens",
        "description": "Check-in for your flight BA456 to Barcelona opens in 2 hours",
        "time": "2024-01-20T14:00:00Z",
        "location": "Heathrow Airport",
        "priority": "high",
        "completed": False,
    },
    {
        "id": "2",
        "type": "hotel",
        "title": "Hotel Check-in",
        "description": "Check-in at Hotel Barcelona Center starts at 3:00 PM",
        "time": "2024-01-20T15:00:00Z",
        "location": "Barcelona, Spain",
        "priority": "medium",
        "completed": False,
    },
    {
        "id": "3",
        "type": "activity",
        "title": "Sagrada Família Tour",
        "description": "Your guided tour of Sagrada Família starts in 30 minutes",
        "time": "2024-01-20T10:30:00Z",
        "location": "Sagrada Família, Barcelona",
        "priority": "high",
        "completed": False,
    },
    {
        "id": "4",
        "type": "location",
        "title": "Nearby: Park Güell",
        "description": "You're near Park Güell! Perfect time to visit this Gaudí masterpiece.",
        "time": "2024-01-20T16:00:00Z",
        "location": "Park Güell, Barcelona",
        "priority": "low",
        "completed": False,
    },
    {
        "id": "5",
        "type": "suggestion",
        "title": "Local Market Discovery",
        "description": "Based on your interests, check out Mercat de la Boqueria nearby!",
        "time": "2024-01-20T12:00:00Z",
        "location": "La Rambla, Barcelona",
        "priority": "low",
        "completed": False,
    },
)

# Barcelona
SAMPLE_MAP: Mapping[str, Any] = {
    "center": {"latitude": 41.3851, "longitude": 2.1734},
    "markers": (
        {
            "id": "cafe-central",
            "title": "Café Central",
            "description": "Perfect morning coffee spot",
            "latitude": 41.3851,
            "longitude": 2.1734,
            "type": "food",
        },
        {
            "id": "sagrada-familia",
            "title": "Sagrada Familia",
            "description": "Iconic Gaudí masterpiece",
            "latitude": 41.4036,
            "longitude": 2.1744,
            "type": "activity",
        },
        {
            "id": "park-guell",
            "title": "Park Güell",
            "description": "Mosaic wonderland",
            "latitude": 41.4145,
            "longitude": 2.1527,
            "type": "activity",
        },
    ),
}


class SampleDataSource:
    """
    Read-only provider of reminder and map fixtures.

    Every call builds fresh model instances from the underlying records, so
    nothing a caller does to a result can leak into the next request.
    """

    def __init__(
        self,
        reminders: Optional[Sequence[Mapping[str, Any]]] = None,
        map_data: Optional[Mapping[str, Any]] = None,
    ):
        self._reminders = tuple(reminders if reminders is not None else SAMPLE_REMINDERS)
        self._map_data = map_data if map_data is not None else SAMPLE_MAP

    def reminders(self) -> List[ReminderRecord]:
        return [ReminderRecord.model_validate(dict(record)) for record in self._reminders]

    def map_data(self) -> MapData:
        data: Dict[str, Any] = {
            "center": dict(self._map_data["center"]),
            "markers": [dict(marker) for marker in self._map_data.get("markers", ())],
        }
        return MapData.model_validate(data)


# Default data source shared by the API; it is never mutated
default_sample_data = SampleDataSource()
