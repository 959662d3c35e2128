"""Robot geometry: limb segments, flags, walking and the ground grid."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .signals import REST_WRISTS, Hand, Point

PI = 3.1415926534
RANGE = 15
STEP = 0.2
WALK_AMPLITUDE = 1.0
WALK_SPEED = 0.005
_LEFT_PHASE = 3.1415

HIPS = {Hand.RIGHT: (-0.75, 1.5, 0.0), Hand.LEFT: (0.75, 1.5, 0.0)}
FEET = {Hand.RIGHT: (-1.0, 0.5, 0.0), Hand.LEFT: (1.0, 0.5, 0.0)}
SHOULDERS = {Hand.RIGHT: (-1.0, 2.5, 0.25), Hand.LEFT: (1.0, 2.5, 0.25)}

# key -> (position axis, direction, facing angle)
_MOVES = {
    "w": (2, -1, 180.0),
    "s": (2, 1, 0.0),
    "d": (0, 1, 90.0),
    "a": (0, -1, -90.0),
}

Line = Tuple[Point, Point]


@dataclass(frozen=True)
class Segment:
    """A cylinder along +Z rotated by ``angle`` degrees about ``axis``."""

    length: float
    axis: Point
    angle: float


def segment_between(start: Point, end: Point) -> Segment:
    """Length and rotation that carry the Z axis onto ``end - start``."""
    dx, dy, dz = (e - s for s, e in zip(start, end))
    length = math.sqrt(dx * dx + dy * dy + dz * dz)
    axis = (-dy, dx, 0.0)
    if length == 0:
        return Segment(0.0, axis, 0.0)
    cosine = max(-1.0, min(1.0, dz / length))
    return Segment(length, axis, math.acos(cosine) * 180.0 / PI)


def flag_corners(shoulder: Point, wrist: Point) -> Tuple[Point, Point, Point]:
    """Corners of the square flag held at ``wrist``: tip, far corner, near corner.

    The flag extends the arm beyond the wrist and hangs downwards from it.
    """
    vx, vy, vz = (w - s for s, w in zip(shoulder, wrist))
    length = math.hypot(vx, vy)
    if length == 0:
        raise ValueError("shoulder and wrist coincide in the XY plane")
    wx, wy, wz = wrist
    tip = (wx + vx, wy + vy, wz + vz)
    nx, ny = vy / length, -vx / length
    if ny * length >= 0:
        nx, ny = -nx, -ny
    near = (wx + nx * length, wy + ny * length, wz)
    far = (near[0] + vx, near[1] + vy, tip[2])
    return tip, far, near


def leg_swing(frame: int, hand: int) -> float:
    """Forward offset of a foot at animation ``frame``; legs move in antiphase."""
    phase = 0.0 if Hand(hand) is Hand.RIGHT else _LEFT_PHASE
    return WALK_AMPLITUDE * math.sin(frame * WALK_SPEED * 3 + phase)


def ground_grid() -> List[Line]:
    """Lines of the square ground grid the robot walks on."""
    lines: List[Line] = []
    for i in range(-RANGE, RANGE + 1, 2):
        lines.append(((float(i), 0.0, -RANGE), (float(i), 0.0, RANGE)))
        lines.append(((-RANGE, 0.0, float(i)), (RANGE, 0.0, float(i))))
    return lines


def classic_ground_grid() -> List[Line]:
    """Lines of the wider, rectangular ground grid."""
    lines: List[Line] = []
    for i in range(-35, 36, 2):
        lines.append(((float(i), 0.0, -35.0), (float(i), 0.0, 35.0)))
        lines.append(((-50.0, 0.0, float(i)), (50.0, 0.0, float(i))))
    return lines


class Robot:
    """Pose and place of the flag-signalling robot."""

    def __init__(self) -> None:
        self.position = [0.0, 0.0, 0.0]
        self.angle = 0.0
        self.walking = False
        self.walk_frame = 0
        self.feet = dict(FEET)
        self.wrists = dict(REST_WRISTS)

    def reset(self) -> None:
        """Return to the centre of the grid, facing forward."""
        self.angle = 0.0
        self.position[0] = 0.0
        self.position[2] = 0.0

    def step(self, key: str) -> None:
        """Move one step for a w/a/s/d key, staying inside the grid."""
        try:
            axis, direction, angle = _MOVES[key]
        except KeyError:
            raise ValueError(f"not a movement key: {key!r}") from None
        value = self.position[axis] + direction * STEP
        self.position[axis] = max(-RANGE, min(RANGE, value))
        self.angle = angle
        self.walking = True
        self.walk_frame = 0

    def animate(self, frame: Optional[int] = None) -> bool:
        """Swing the feet for ``frame``; False once walking has stopped."""
        if not self.walking:
            return False
        if frame is None:
            frame = self.walk_frame
        for hand in Hand:
            x, y, z = FEET[hand]
            self.feet[hand] = (x, y, z + leg_swing(frame, hand))
        self.walk_frame = frame + 1
        return True

    def stop_walking(self) -> None:
        """Stop walking and put both feet back in place."""
        self.walking = False
        self.feet = dict(FEET)

    def set_wrists(self, right: Optional[Point], left: Optional[Point]) -> None:
        """Place both wrists; None puts a wrist back at rest."""
        self.wrists[Hand.RIGHT] = right if right is not None else REST_WRISTS[Hand.RIGHT]
        self.wrists[Hand.LEFT] = left if left is not None else REST_WRISTS[Hand.LEFT]

    def leg_segment(self, hand: int) -> Segment:
        """Shin from hip to foot."""
        return segment_between(HIPS[Hand(hand)], self.feet[Hand(hand)])

    def arm_segment(self, hand: int) -> Segment:
        """Arm from shoulder to wrist."""
        return segment_between(SHOULDERS[Hand(hand)], self.wrists[Hand(hand)])

    def flag(self, hand: int) -> Tuple[Point, Point, Point]:
        """Flag corners for the given hand."""
        return flag_corners(SHOULDERS[Hand(hand)], self.wrists[Hand(hand)])