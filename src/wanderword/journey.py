"""Word journey data model.

Backends return plain JSON dicts using camelCase keys. These dataclasses give
the rest of the package typed access to that shape, and ``validate_journey``
reports where a dict departs from it.

``from_dict`` never raises: backends are free to return partial or oddly typed
answers, so missing or wrong-typed fields become empty values and steps that
are not objects are skipped. Use ``validate_journey`` to find out what was off.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

ROUTE_TYPES = ("land", "sea")


def _obj(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _coordinates(value: Any) -> tuple[float, float]:
    try:
        lon, lat = value
        return float(lon), float(lat)
    except (TypeError, ValueError):
        return 0.0, 0.0


@dataclass
class Location:
    """A named place. Coordinates are (longitude, latitude)."""

    name: str
    country_code: str
    coordinates: tuple[float, float]

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]

    @classmethod
    def from_dict(cls, data: Any) -> "Location":
        data = _obj(data)
        return cls(
            name=_text(data.get("name")),
            country_code=_text(data.get("countryCode")),
            coordinates=_coordinates(data.get("coordinates")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "countryCode": self.country_code,
            "coordinates": list(self.coordinates),
        }


@dataclass
class Origin:
    word: str
    language: str
    meaning: str
    location: Location
    century: str

    @classmethod
    def from_dict(cls, data: Any) -> "Origin":
        data = _obj(data)
        return cls(
            word=_text(data.get("word")),
            language=_text(data.get("language")),
            meaning=_text(data.get("meaning")),
            location=Location.from_dict(data.get("location")),
            century=_text(data.get("century")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.word,
            "language": self.language,
            "meaning": self.meaning,
            "location": self.location.to_dict(),
            "century": self.century,
        }


@dataclass
class JourneyStep:
    """One waypoint after the origin."""

    order: int
    word: str
    language: str
    location: Location
    century: str
    route_type: str
    notes: str
    pronunciation: Optional[str] = None

    @property
    def by_sea(self) -> bool:
        return self.route_type == "sea"

    @classmethod
    def from_dict(cls, data: Any) -> "JourneyStep":
        data = _obj(data)
        try:
            order = int(data.get("order", 0))
        except (TypeError, ValueError):
            order = 0
        return cls(
            order=order,
            word=_text(data.get("word")),
            language=_text(data.get("language")),
            location=Location.from_dict(data.get("location")),
            century=_text(data.get("century")),
            route_type=_text(data.get("routeType")) or "land",
            notes=_text(data.get("notes")),
            pronunciation=_text(data.get("pronunciation")) or None,
        )

    def to_dict(self) -> dict[str, Any]:
        result = {
            "order": self.order,
            "word": self.word,
            "language": self.language,
            "location": self.location.to_dict(),
            "century": self.century,
            "routeType": self.route_type,
            "notes": self.notes,
        }
        if self.pronunciation:
            result["pronunciation"] = self.pronunciation
        return result


@dataclass
class WordJourney:
    word: str
    current_meaning: str
    origin: Origin
    journey: list[JourneyStep] = field(default_factory=list)
    narrative: str = ""
    route_summary: str = ""
    fun_fact: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "WordJourney":
        """Build a journey from a backend dict, filling gaps with empty values."""
        data = _obj(data)
        steps = data.get("journey")
        if not isinstance(steps, list):
            steps = []
        return cls(
            word=_text(data.get("word")),
            current_meaning=_text(data.get("currentMeaning")),
            origin=Origin.from_dict(data.get("origin")),
            journey=[JourneyStep.from_dict(s) for s in steps if isinstance(s, dict)],
            narrative=_text(data.get("narrative")),
            route_summary=_text(data.get("routeSummary")),
            fun_fact=_text(data.get("funFact")) or None,
        )

    def to_dict(self) -> dict[str, Any]:
        result = {
            "word": self.word,
            "currentMeaning": self.current_meaning,
            "origin": self.origin.to_dict(),
            "journey": [s.to_dict() for s in self.journey],
            "narrative": self.narrative,
            "routeSummary": self.route_summary,
        }
        if self.fun_fact:
            result["funFact"] = self.fun_fact
        return result

    @property
    def waypoints(self) -> list[Location]:
        """Origin location followed by every step location, in travel order."""
        return [self.origin.location] + [s.location for s in self.journey]


def _location_problems(where: str, location: Any) -> list[str]:
    if not isinstance(location, dict):
        return [f"{where}: missing location"]
    problems = []
    if not location.get("name"):
        problems.append(f"{where}: location has no name")
    code = location.get("countryCode")
    if not isinstance(code, str) or len(code) != 2:
        problems.append(f"{where}: countryCode must be two letters")
    coords = location.get("coordinates")
    if (
        not isinstance(coords, (list, tuple))
        or len(coords) != 2
        or not all(isinstance(c, (int, float)) and not isinstance(c, bool) for c in coords)
    ):
        problems.append(f"{where}: coordinates must be [longitude, latitude]")
    else:
        lon, lat = coords
        if not -180 <= lon <= 180 or not -90 <= lat <= 90:
            problems.append(f"{where}: coordinates out of range")
    return problems


def validate_journey(data: Any) -> list[str]:
    """Check a backend dict against the journey shape.

    Returns:
        List of problems; empty when the dict is a well-formed journey
    """
    if not isinstance(data, dict):
        return ["result is not a JSON object"]

    problems = []
    if not data.get("word"):
        problems.append("missing word")

    origin = data.get("origin")
    if not isinstance(origin, dict):
        problems.append("missing origin")
    else:
        problems.extend(_location_problems("origin", origin.get("location")))

    steps = data.get("journey")
    if not isinstance(steps, list):
        problems.append("journey must be a list")
        return problems

    for index, step in enumerate(steps, start=1):
        where = f"journey[{index}]"
        if not isinstance(step, dict):
            problems.append(f"{where}: not an object")
            continue
        if step.get("order") != index:
            problems.append(f"{where}: order is {step.get('order')!r}, expected {index}")
        if step.get("routeType") not in ROUTE_TYPES:
            problems.append(f"{where}: routeType must be 'land' or 'sea'")
        problems.extend(_location_problems(where, step.get("location")))

    return problems
