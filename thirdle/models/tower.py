"""
Tower Topology Module

Maps between the logical addresses used by the game (try, face, letter)
and the physical slots of the hollow square tower.

Each try is one horizontal ring of cubes. The ring is built row-major over
(depth, letter) keeping only perimeter cells, so one layer holds 4 * (L - 1)
cubes for a word length of L. The four corner cubes are shared by two faces.
"""

from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from typing import List, Tuple

from .errors import TopologyError


class Face(IntEnum):
    """Tower faces in the cyclic order words are wrapped around a layer."""
    SOUTH = 0
    EAST = 1
    NORTH = 2
    WEST = 3

    @property
    def previous(self) -> "Face":
        return Face((self.value - 1) % len(Face))

    @property
    def next(self) -> "Face":
        return Face((self.value + 1) % len(Face))


NUM_FACES = len(Face)


@dataclass(frozen=True)
class FaceLetter:
    """One logical position: a letter offset on a given face."""
    face: Face
    letter: int


@dataclass(frozen=True)
class Slot:
    """A physical cube of one layer and the faces that address it."""
    index: int
    letter_offset: int
    depth_offset: int
    faces: Tuple[FaceLetter, ...]

    @property
    def is_corner(self) -> bool:
        return len(self.faces) == 2


def _check_word_length(word_length: int) -> None:
    if not isinstance(word_length, int) or word_length < 2:
        raise TopologyError(f"Word length must be an integer >= 2, got {word_length!r}")


def _check_offset(name: str, value: int, word_length: int) -> None:
    if not 0 <= value < word_length:
        raise TopologyError(f"{name} {value} outside [0, {word_length - 1}]")


def slots_per_try(word_length: int) -> int:
    _check_word_length(word_length)
    return 4 * (word_length - 1)


def classify_slot(letter_offset: int, depth_offset: int, word_length: int) -> Tuple[FaceLetter, ...]:
    """
    Returns the one or two (face, letter) assignments of a perimeter cube.

    Args:
        letter_offset: Horizontal position of the cube (0..L-1)
        depth_offset: Depth position of the cube (0..L-1), 0 being the south row
        word_length: Letters per face (L)

    Returns:
        Tuple with two entries for a corner cube, one entry otherwise

    Raises:
        TopologyError: If a coordinate is out of range or names an interior cell
    """
    _check_word_length(word_length)
    _check_offset("Letter offset", letter_offset, word_length)
    _check_offset("Depth offset", depth_offset, word_length)

    last = word_length - 1
    x, z = letter_offset, depth_offset
    x_edge = x in (0, last)
    z_edge = z in (0, last)

    if x_edge and z_edge:
        if z == 0 and x == 0:
            return (FaceLetter(Face.SOUTH, 0), FaceLetter(Face.WEST, last))
        if z == 0:
            return (FaceLetter(Face.SOUTH, last), FaceLetter(Face.EAST, 0))
        if x == last:
            return (FaceLetter(Face.NORTH, 0), FaceLetter(Face.EAST, last))
        return (FaceLetter(Face.NORTH, last), FaceLetter(Face.WEST, 0))

    if z == 0:
        return (FaceLetter(Face.SOUTH, x),)
    if z == last:
        # North reads right to left when seen from outside
        return (FaceLetter(Face.NORTH, last - x),)
    if x == last:
        return (FaceLetter(Face.EAST, z),)
    if x == 0:
        return (FaceLetter(Face.WEST, last - z),)

    raise TopologyError(f"Cell ({x}, {z}) is inside the ring and has no cube")


def slot_coordinates(slot: int, word_length: int) -> Tuple[int, int]:
    """Returns (letter_offset, depth_offset) of a physical slot of one layer."""
    total = slots_per_try(word_length)
    if not 0 <= slot < total:
        raise TopologyError(f"Physical slot {slot} outside [0, {total})")

    last = word_length - 1
    back_row_start = 3 * word_length - 4

    if slot < word_length:
        return slot, 0
    if slot >= back_row_start:
        return slot - back_row_start, last

    # Middle rows hold exactly two cubes, west then east
    row, side = divmod(slot - word_length, 2)
    return (last if side else 0), row + 1


def sequential_to_physical(index: int, word_length: int) -> int:
    """
    Converts a sequential band index into a physical slot.

    The band runs South, East, North, West, each face contributing its
    letters 0..L-2; a face's last letter is the next face's first letter.
    """
    total = slots_per_try(word_length)
    if not 0 <= index < total:
        raise TopologyError(f"Sequential index {index} outside [0, {total})")

    band, k = divmod(index, word_length - 1)
    face = Face(band)

    if face is Face.SOUTH:
        return k
    if face is Face.EAST:
        return word_length + 2 * k - 1
    if face is Face.NORTH:
        return 4 * word_length - 5 - k
    return 3 * word_length - 4 - 2 * k


def physical_to_sequential(slot: int, word_length: int) -> int:
    """Inverse of sequential_to_physical."""
    x, z = slot_coordinates(slot, word_length)
    for assignment in classify_slot(x, z, word_length):
        # Corners belong to the band of the face whose first letter they are
        if assignment.letter < word_length - 1:
            return assignment.face * (word_length - 1) + assignment.letter
    raise TopologyError(f"Physical slot {slot} has no band owner")


class TowerLayout:
    """
    Topology of a whole tower: `num_tries` stacked layers of one ring each.

    Tower-wide slot indices number every cube, layer by layer:
    try * slots_per_try + slot.
    """

    def __init__(self, word_length: int, num_tries: int):
        _check_word_length(word_length)
        if not isinstance(num_tries, int) or num_tries < 1:
            raise TopologyError(f"Number of tries must be an integer >= 1, got {num_tries!r}")

        self.word_length = word_length
        self.num_tries = num_tries
        self.slots_per_try = slots_per_try(word_length)

    def __repr__(self) -> str:
        return f"TowerLayout(word_length={self.word_length}, num_tries={self.num_tries})"

    @property
    def total_slots(self) -> int:
        return self.slots_per_try * self.num_tries

    def slots(self) -> List[Slot]:
        """All cubes of one layer in physical creation order."""
        return list(_layer_slots(self.word_length))

    def corners(self) -> List[Slot]:
        return [slot for slot in _layer_slots(self.word_length) if slot.is_corner]

    def logical_to_physical(self, face: Face, letter: int) -> int:
        _check_offset("Letter", letter, self.word_length)
        face = Face(face)
        last = self.word_length - 1
        if letter == last:
            # The last letter is the first letter of the next face
            face, letter = face.next, 0
        return sequential_to_physical(face * last + letter, self.word_length)

    def slot_coordinates(self, slot: int) -> Tuple[int, int]:
        return slot_coordinates(slot, self.word_length)

    def physical_to_logical(self, slot: int) -> Tuple[FaceLetter, ...]:
        x, z = self.slot_coordinates(slot)
        return classify_slot(x, z, self.word_length)

    def tower_index(self, try_index: int, face: Face, letter: int) -> int:
        self._check_try(try_index)
        return try_index * self.slots_per_try + self.logical_to_physical(face, letter)

    def split_tower_index(self, index: int) -> Tuple[int, int]:
        """Returns (try, physical slot) of a tower-wide slot index."""
        if not 0 <= index < self.total_slots:
            raise TopologyError(f"Tower slot {index} outside [0, {self.total_slots})")
        return divmod(index, self.slots_per_try)

    def _check_try(self, try_index: int) -> None:
        if not 0 <= try_index < self.num_tries:
            raise TopologyError(f"Try {try_index} outside [0, {self.num_tries})")


@lru_cache(maxsize=None)
def _layer_slots(word_length: int) -> Tuple[Slot, ...]:
    slots = []
    last = word_length - 1
    for z in range(word_length):
        for x in range(word_length):
            if z not in (0, last) and x not in (0, last):
                continue
            slots.append(Slot(
                index=len(slots),
                letter_offset=x,
                depth_offset=z,
                faces=classify_slot(x, z, word_length),
            ))
    return tuple(slots)


@lru_cache(maxsize=None)
def get_layout(word_length: int, num_tries: int) -> TowerLayout:
    """Shared layout instance per tower shape."""
    return TowerLayout(word_length, num_tries)
