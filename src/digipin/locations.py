"""
Reference places inside the DIGIPIN region.

Used by the HTTP service's /v1/places endpoints and handy as known-good
inputs in tests.
"""
from dataclasses import dataclass
from typing import List, Optional

from .domain import Coordinate


@dataclass(frozen=True)
class City:
    name: str
    state: str
    coordinate: Coordinate


@dataclass(frozen=True)
class Landmark:
    name: str
    type: str
    coordinate: Coordinate


CITIES = (
    City("Delhi", "Delhi", Coordinate(28.6139, 77.2090)),
    City("Mumbai", "Maharashtra", Coordinate(19.0760, 72.8777)),
    City("Bangalore", "Karnataka", Coordinate(12.9716, 77.5946)),
    City("Chennai", "Tamil Nadu", Coordinate(13.0827, 80.2707)),
)

LANDMARKS = (
    Landmark("Taj Mahal", "Monument", Coordinate(27.1751, 78.0421)),
    Landmark("Gateway of India", "Monument", Coordinate(18.9217, 72.8347)),
    Landmark("India Gate", "Monument", Coordinate(28.6129, 77.2295)),
    Landmark("Qutub Minar", "Monument", Coordinate(28.5245, 77.1855)),
)


def find_city(name: str) -> Optional[City]:
    """Case-insensitive city lookup."""
    wanted = name.strip().casefold()
    return next((city for city in CITIES if city.name.casefold() == wanted), None)


def find_landmark(name: str) -> Optional[Landmark]:
    """Case-insensitive landmark lookup."""
    wanted = name.strip().casefold()
    return next((place for place in LANDMARKS if place.name.casefold() == wanted), None)


def all_places() -> List[tuple]:
    """(kind, name, coordinate) for every reference place."""
    places = [("city", city.name, city.coordinate) for city in CITIES]
    places += [("landmark", mark.name, mark.coordinate) for mark in LANDMARKS]
    return places
