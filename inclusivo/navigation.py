"""Indoor route steps between campus locations.

Routes come from a fixed step template (leave, change building, change
floor, walk to room, arrive), not from a graph search, so once both
endpoints exist the calculation cannot fail.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional

from . import constants as C
from .models import Direction, Location, LocationType, NavigationStep, Route

LOG = logging.getLogger(__name__)

_FAVORITE_TYPES = (LocationType.CLASSROOM, LocationType.LIBRARY)


def route_steps(origin: Location, destination: Location) -> List[NavigationStep]:
    steps: List[NavigationStep] = [
        NavigationStep(f"Leave {origin.name}", C.STEP_LEAVE_ORIGIN, Direction.STRAIGHT),
    ]

    if origin.building != destination.building:
        steps.append(
            NavigationStep(
                f"Head toward {destination.building}",
                C.STEP_TO_BUILDING,
                Direction.STRAIGHT,
                landmark="Follow the main corridor",
            )
        )
        steps.append(
            NavigationStep(
                f"Turn right at the entrance of {destination.building}",
                C.STEP_BUILDING_ENTRANCE,
                Direction.RIGHT,
            )
        )

    if origin.floor != destination.floor:
        vertical = Direction.UP if destination.floor > origin.floor else Direction.DOWN
        if destination.accessibility.has_elevator:
            steps.append(
                NavigationStep(
                    f"Take the elevator to floor {destination.floor}",
                    C.STEP_ELEVATOR,
                    vertical,
                    landmark="The elevator is on your left",
                )
            )
        else:
            steps.append(
                NavigationStep(
                    f"Take the stairs to floor {destination.floor}",
                    C.STEP_STAIRS,
                    vertical,
                )
            )

    if destination.room:
        steps.append(
            NavigationStep(
                f"Walk down the corridor to {destination.room}",
                C.STEP_CORRIDOR_TO_ROOM,
                Direction.STRAIGHT,
            )
        )

    steps.append(NavigationStep(f"You have arrived at {destination.name}", 0, Direction.STRAIGHT))
    return steps


def estimated_minutes(distance: int) -> int:
    return math.ceil(distance / C.WALKING_SPEED_M_PER_MIN)


class NavigationRouter:
    """Location directory lookups and template routes."""

    def __init__(self, locations: Iterable[Location]) -> None:
        self._locations: List[Location] = list(locations)

    def all_locations(self) -> List[Location]:
        return list(self._locations)

    def get_location(self, location_id: str) -> Optional[Location]:
        for loc in self._locations:
            if loc.id == location_id:
                return loc
        return None

    def search(self, query: str) -> List[Location]:
        """Case-insensitive substring match over name, building and room."""
        needle = (query or "").lower()
        return [
            loc
            for loc in self._locations
            if needle in loc.name.lower()
            or needle in loc.building.lower()
            or (loc.room is not None and needle in loc.room.lower())
        ]

    def calculate_route(self, from_id: str, to_id: str) -> Optional[Route]:
        origin = self.get_location(from_id)
        destination = self.get_location(to_id)
        if origin is None or destination is None:
            LOG.info("No route: unknown location (%s -> %s)", from_id, to_id)
            return None

        steps = route_steps(origin, destination)
        distance = sum(step.distance for step in steps)
        return Route(
            origin=origin,
            destination=destination,
            distance=distance,
            estimated_time=estimated_minutes(distance),
            steps=steps,
        )

    def is_accessible(self, location_id: str) -> bool:
        loc = self.get_location(location_id)
        return bool(loc and loc.accessibility.wheelchair_accessible)

    def favorites(self) -> List[Location]:
        """First classrooms/libraries in directory order; not personalized."""
        return [loc for loc in self._locations if loc.type in _FAVORITE_TYPES][: C.FAVORITES_LIMIT]
