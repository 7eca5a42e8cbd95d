"""In-progress room selection for a quote.

Selections are immutable values. Every transition returns a new list of
RoomSelection and leaves its input untouched, so the same selection can be
priced concurrently without copying.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from .catalog import AgeRangeCatalog, Room

OccupantCount = Annotated[int, Field(ge=0)]


class RoomInstance(BaseModel):
    """One physical unit of a room type with its occupants per age range."""

    model_config = ConfigDict(strict=True, frozen=True)

    id: str
    occupants: dict[str, OccupantCount] = Field(default_factory=dict)

    @property
    def occupancy(self) -> int:
        """Total number of occupants in this instance."""
        return sum(self.occupants.values())


class RoomSelection(BaseModel):
    """All booked instances of one room type."""

    model_config = ConfigDict(strict=True, frozen=True)

    room: Room
    instances: list[RoomInstance] = Field(default_factory=list)

    @property
    def room_id(self) -> str:
        return self.room.id


def instance_occupancy(instance: RoomInstance) -> int:
    """Total occupants of an instance, for capacity display."""
    return instance.occupancy


def new_instance(instance_id: str, age_ranges: AgeRangeCatalog) -> RoomInstance:
    """Create an instance with zero occupants for every age range."""
    return RoomInstance(id=instance_id, occupants={r.id: 0 for r in age_ranges})


def _next_instance_ids(room_id: str, existing: Sequence[RoomInstance], quantity: int) -> list[str]:
    taken = {i.id for i in existing}
    ids: list[str] = []
    n = len(existing) + 1
    while len(ids) < quantity:
        candidate = f"{room_id}-{n}"
        if candidate not in taken:
            ids.append(candidate)
        n += 1
    return ids


def add_room(
    selections: Sequence[RoomSelection],
    room: Room,
    quantity: int,
    age_ranges: AgeRangeCatalog,
) -> list[RoomSelection]:
    """Add ``quantity`` empty instances of a room.

    Instances are appended to the existing selection of that room, if any.

    Raises:
        ValueError: If quantity is less than 1.
    """
    if quantity < 1:
        raise ValueError("quantity must be at least 1")

    result: list[RoomSelection] = []
    added = False
    for selection in selections:
        if selection.room_id == room.id:
            ids = _next_instance_ids(room.id, selection.instances, quantity)
            instances = list(selection.instances) + [new_instance(i, age_ranges) for i in ids]
            result.append(RoomSelection(room=selection.room, instances=instances))
            added = True
        else:
            result.append(selection)

    if not added:
        ids = _next_instance_ids(room.id, [], quantity)
        result.append(
            RoomSelection(room=room, instances=[new_instance(i, age_ranges) for i in ids])
        )
    return result


def _replace_instance(
    selections: Sequence[RoomSelection],
    room_id: str,
    instance_id: str,
    occupants_for: Callable[[RoomInstance], dict[str, int]],
) -> list[RoomSelection]:
    found = False
    result: list[RoomSelection] = []
    for selection in selections:
        if selection.room_id != room_id:
            result.append(selection)
            continue
        instances: list[RoomInstance] = []
        for instance in selection.instances:
            if instance.id == instance_id:
                found = True
                instance = RoomInstance(id=instance.id, occupants=occupants_for(instance))
            instances.append(instance)
        result.append(RoomSelection(room=selection.room, instances=instances))

    if not found:
        raise KeyError(f"Room instance {instance_id} not found in room {room_id}")
    return result


def set_occupant_count(
    selections: Sequence[RoomSelection],
    room_id: str,
    instance_id: str,
    age_range_id: str,
    count: int,
) -> list[RoomSelection]:
    """Set the occupant count of one age range in one instance.

    Raises:
        ValueError: If count is negative.
        KeyError: If the instance does not exist.
    """
    if count < 0:
        raise ValueError("occupant count cannot be negative")

    def occupants_for(instance: RoomInstance) -> dict[str, int]:
        occupants = dict(instance.occupants)
        occupants[age_range_id] = count
        return occupants

    return _replace_instance(selections, room_id, instance_id, occupants_for)


def adjust_occupant_count(
    selections: Sequence[RoomSelection],
    room_id: str,
    instance_id: str,
    age_range_id: str,
    delta: int,
) -> list[RoomSelection]:
    """Add ``delta`` to an occupant count, clamping the result at zero."""

    def occupants_for(instance: RoomInstance) -> dict[str, int]:
        occupants = dict(instance.occupants)
        occupants[age_range_id] = max(0, occupants.get(age_range_id, 0) + delta)
        return occupants

    return _replace_instance(selections, room_id, instance_id, occupants_for)


def remove_instance(
    selections: Sequence[RoomSelection],
    room_id: str,
    instance_id: str,
) -> list[RoomSelection]:
    """Remove one instance. A room left without instances is removed too."""
    result: list[RoomSelection] = []
    for selection in selections:
        if selection.room_id != room_id:
            result.append(selection)
            continue
        instances = [i for i in selection.instances if i.id != instance_id]
        if instances:
            result.append(RoomSelection(room=selection.room, instances=instances))
    return result


def remove_room(selections: Sequence[RoomSelection], room_id: str) -> list[RoomSelection]:
    """Remove a room and all of its instances."""
    return [s for s in selections if s.room_id != room_id]


def assigned_count(selections: Sequence[RoomSelection], age_range_id: str) -> int:
    """Occupants of an age range assigned across all instances."""
    return sum(
        instance.occupants.get(age_range_id, 0)
        for selection in selections
        for instance in selection.instances
    )


def remaining_participants(
    participant_totals: Mapping[str, int],
    selections: Sequence[RoomSelection],
    age_range_id: str,
) -> int:
    """Participants of an age range not yet assigned to a room instance.

    May be negative when more occupants were assigned than declared.
    """
    return participant_totals.get(age_range_id, 0) - assigned_count(selections, age_range_id)
