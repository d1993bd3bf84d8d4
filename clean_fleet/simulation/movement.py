"""Per-robot movement policy: axis-priority greedy steps with detour fallback.

Pure axis-priority movement deadlocks when two robots face off along one
axis; the perpendicular detours let a robot sidestep instead of freezing.
"""

from __future__ import annotations

from collections.abc import Container
from random import Random

from clean_fleet.domain.grid import NEIGHBOR_OFFSETS, Coord


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def candidate_moves(position: Coord, target: Coord) -> list[Coord]:
    """Return candidate next cells toward ``target`` in priority order.

    Primary axis (larger delta, ties favor x) first, then the secondary axis,
    then two perpendicular detours when one delta is zero, then any remaining
    orthogonal neighbor. Bounds and occupancy are not checked here.
    """
    x, y = position
    dx = target[0] - x
    dy = target[1] - y

    moves: list[Coord] = []
    if abs(dx) >= abs(dy):
        if dx != 0:
            moves.append((x + _sign(dx), y))
        if dy != 0:
            moves.append((x, y + _sign(dy)))
        if dy == 0:
            moves.extend([(x, y + 1), (x, y - 1)])
        elif dx == 0:
            moves.extend([(x + 1, y), (x - 1, y)])
    else:
        if dy != 0:
            moves.append((x, y + _sign(dy)))
        if dx != 0:
            moves.append((x + _sign(dx), y))
        if dx == 0:
            moves.extend([(x + 1, y), (x - 1, y)])
        elif dy == 0:
            moves.extend([(x, y + 1), (x, y - 1)])

    for ox, oy in NEIGHBOR_OFFSETS:
        neighbor = (x + ox, y + oy)
        if neighbor not in moves:
            moves.append(neighbor)
    return moves


def step_toward(
    position: Coord,
    target: Coord,
    occupied: Container[Coord],
    cols: int,
    rows: int,
) -> Coord | None:
    """Return the first free in-bounds candidate toward ``target``, or ``None``."""
    for nx_, ny_ in candidate_moves(position, target):
        if 0 <= nx_ < cols and 0 <= ny_ < rows and (nx_, ny_) not in occupied:
            return (nx_, ny_)
    return None


def free_neighbors(
    position: Coord, occupied: Container[Coord], cols: int, rows: int
) -> list[Coord]:
    """In-bounds, unoccupied orthogonal neighbors of ``position``."""
    x, y = position
    cells: list[Coord] = []
    for ox, oy in NEIGHBOR_OFFSETS:
        nx_, ny_ = x + ox, y + oy
        if 0 <= nx_ < cols and 0 <= ny_ < rows and (nx_, ny_) not in occupied:
            cells.append((nx_, ny_))
    return cells


def wander_step(
    position: Coord,
    occupied: Container[Coord],
    cols: int,
    rows: int,
    rng: Random,
) -> Coord | None:
    """Unweighted random step to a free neighbor, or ``None`` when boxed in."""
    cells = free_neighbors(position, occupied, cols, rows)
    if not cells:
        return None
    return rng.choice(cells)
