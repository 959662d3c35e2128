"""The earlier flag lesson: signal a line of hiragana, then ask for another."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .app import (
    LEFT_BUTTON,
    MIDDLE_BUTTON,
    RIGHT_BUTTON,
    TEXTURES,
    TICKS_PER_MOTION,
    TICKS_PER_SECOND,
    _hull,
    _model,
    _project,
    _say,
    _view,
)
from .bitmap import BitmapError, read_rgba
from .robot import FEET, HIPS, SHOULDERS, Robot, classic_ground_grid
from .signals import (
    MOTIONS,
    REST_WRISTS,
    Hand,
    Point,
    UnknownCharacter,
    classic_wrist_position,
    romaji,
    wrist_position,
)
from .story import classic_banner

INPUT_SIZE = 10
"""Size of the input line, terminator included."""

INPUT_LENGTH = INPUT_SIZE - 1
"""Most characters taken from one line of input."""

WINDOW_SIZE = 600
LIGHT_POSITION = (4.0, 8.0, 5.0)
FAR_PLANE = 40.0
IDLE_CAPTION = "Robo-ko"


@dataclass
class ClassicCamera:
    """Orbiting camera at a fixed distance from the robot."""

    distance: float = 20.0
    twist: float = 0.0
    elevation: float = -15.0
    azimuth: float = 0.0

    def reset(self) -> None:
        """Back to the starting view."""
        self.distance = 20.0
        self.twist = 0.0
        self.elevation = -15.0
        self.azimuth = 0.0

    def drag(self, button: int, dx: float, dy: float) -> None:
        """Move the view for a mouse drag of (dx, dy) pixels, y pointing down."""
        if button == LEFT_BUTTON:
            self.azimuth += dx / 2.0
            self.elevation -= dy / 2.0
        elif button == MIDDLE_BUTTON:
            self.twist = math.fmod(self.twist + dx, 360.0)
        elif button == RIGHT_BUTTON:
            self.distance -= dy / 40.0
            self.twist += dx / 2.0


class ClassicLesson:
    """Signalling of one line of text; unknown characters stop it."""

    def __init__(self) -> None:
        self.text = ""
        self.index = 0
        self.motion = 0
        self.frames = 0
        self.shown = ""
        self.words = False
        self.revolving = False
        self.idle_active = True
        self.completed: Optional[str] = None
        self.rejected: Optional[str] = None

    def start(self, text: str) -> None:
        """Begin signalling the first line of ``text`` (at most 9 characters)."""
        line = text.split("\n", 1)[0][:INPUT_LENGTH]
        if not line:
            raise ValueError("nothing to signal")
        self.text = line
        self.index = 0
        self.motion = 0
        self.frames = 0
        self.shown = ""
        self.completed = None
        self.rejected = None
        self.words = True

    def _advance(self) -> None:
        self.index += 1
        self.motion = 0

    def tick(self) -> Optional[str]:
        """Advance one idle tick; returns the character whose signal has just begun."""
        if not self.words:
            return None
        announced = None
        if self.motion == 0 and self.frames == 0:
            announced = self.text[self.index]
            self.shown += romaji(announced)
        self.frames += 1
        if self.frames != TICKS_PER_MOTION:
            return announced
        self.frames = 0
        self.motion += 1
        char = self.text[self.index]
        if self.motion >= MOTIONS:
            self._advance()
        else:
            try:
                point = wrist_position(Hand.RIGHT, char, self.motion)
            except UnknownCharacter:
                self.rejected = char
                self.words = False
                self.revolving = not self.revolving
                return announced
            if point is None:
                self._advance()
        if self.index >= len(self.text):
            self.completed = self.text
            self.words = False
            self.revolving = not self.revolving
        return announced

    def wrist(self, hand: int) -> Point:
        """Where ``hand``'s wrist is right now."""
        hand = Hand(hand)
        if self.words:
            point = classic_wrist_position(hand, self.text[self.index], self.motion)
            if point is not None:
                return point
        return REST_WRISTS[hand]

    def label(self) -> str:
        """Text shown above the robot."""
        return self.shown if self.words else IDLE_CAPTION

    def _toggle(self) -> None:
        self.revolving = not self.revolving
        self.idle_active = self.revolving


def _ask_text(lesson: ClassicLesson) -> None:
    while True:
        _say(f"\n文字列を入力してください（ひらがな{INPUT_SIZE}字以内）: ")
        try:
            lesson.start(input())
        except ValueError:
            continue
        _say(classic_banner(0))
        return


def _finish(text: str) -> None:
    _say(classic_banner(1))
    _say(classic_banner(0))
    _say(f"\n文章「{text}」を出力し終えました\n")
    _say(classic_banner(1))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the lesson window and run until Escape is pressed."""
    args = list(sys.argv if argv is None else ["tebata-classic", *argv])
    title = args[0] if args else "tebata-classic"

    images = []
    for name in TEXTURES:
        try:
            images.append(read_rgba(name))
        except BitmapError:
            print("Error! ")
            return 1

    import pyglet
    from pyglet.window import key, mouse

    lesson = ClassicLesson()
    camera = ClassicCamera()
    robot = Robot()
    window = pyglet.window.Window(WINDOW_SIZE, WINDOW_SIZE, caption=title, resizable=True)
    pyglet.gl.glClearColor(0.5, 0.5, 0.5, 1.0)
    textures = [pyglet.image.ImageData(w, h, "RGBA", data) for w, h, data in images]

    _say(classic_banner(0))
    _say(classic_banner(-1))
    _say(classic_banner(1))

    def screen(point: Point, local: bool = True):
        world = _model(point, robot) if local else point
        view = _view(world, camera, 0.0)
        if -view[2] > FAR_PLANE:
            return None
        return _project(view, window.width, window.height)

    def facing(center: Point, normal: Point) -> bool:
        tip = tuple(c + n for c, n in zip(center, normal))
        a = _view(_model(center, robot), camera, 0.0)
        b = _view(_model(tip, robot), camera, 0.0)
        return b[2] > a[2]

    def box(batch, keep, center: Point, size: Point, color) -> None:
        cx, cy, cz = center
        hx, hy, hz = (s / 2 for s in size)
        corners = [
            screen((cx + sx * hx, cy + sy * hy, cz + sz * hz))
            for sx in (-1, 1) for sy in (-1, 1) for sz in (-1, 1)
        ]
        if any(c is None for c in corners):
            return
        outline = _hull([(c[0], c[1]) for c in corners])
        if len(outline) >= 3:
            keep.append(pyglet.shapes.Polygon(*outline, color=color, batch=batch))

    def ball(batch, keep, center: Point, radius: float, color, local=True) -> None:
        p = screen(center, local)
        if p is not None:
            keep.append(pyglet.shapes.Circle(
                p[0], p[1], max(radius * p[2], 1.0), color=color, batch=batch))

    def line(batch, keep, a: Point, b: Point, thickness: float, color, local=True) -> None:
        pa, pb = screen(a, local), screen(b, local)
        if pa is None or pb is None:
            return
        width = max(thickness * (pa[2] + pb[2]) / 2, 1.0)
        keep.append(pyglet.shapes.Line(
            pa[0], pa[1], pb[0], pb[1], width, color=color, batch=batch))

    def picture(batch, keep, image, corners: List[Point], normal: Point) -> None:
        center = tuple(sum(c[i] for c in corners) / 4 for i in range(3))
        if not facing(center, normal):
            return
        points = [screen(c) for c in corners]
        if any(p is None for p in points):
            return
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        sprite = pyglet.sprite.Sprite(image, x=min(xs), y=min(ys), batch=batch)
        sprite.scale_x = (max(xs) - min(xs) or 1.0) / image.width
        sprite.scale_y = (max(ys) - min(ys) or 1.0) / image.height
        keep.append(sprite)

    grey = (204, 204, 204)

    @window.event
    def on_draw():
        window.clear()
        robot.set_wrists(lesson.wrist(Hand.RIGHT), lesson.wrist(Hand.LEFT))
        batch = pyglet.graphics.Batch()
        keep: list = []
        for a, b in classic_ground_grid():
            line(batch, keep, a, b, 0.02, (255, 255, 255), local=False)
        ball(batch, keep, LIGHT_POSITION, 1.0, (255, 255, 0), local=False)
        for hand in Hand:
            line(batch, keep, HIPS[hand], FEET[hand], 0.5, grey)
            ball(batch, keep, FEET[hand], 0.5, grey)
        box(batch, keep, (0.0, 2.25, 0.0), (2.0, 1.5, 0.99), grey)
        for hand in Hand:
            wrist = robot.wrists[hand]
            line(batch, keep, SHOULDERS[hand], wrist, 0.5, grey)
            ball(batch, keep, wrist, 0.5, grey)
        box(batch, keep, (0.0, 4.0, 0.0), (3.0, 2.0, 1.99), grey)
        box(batch, keep, (0.0, 5.0, 0.0), (0.75, 0.75, 0.5), grey)
        picture(batch, keep, textures[0],
                [(-1.5, 5.0, 1.0), (1.5, 5.0, 1.0), (1.5, 3.0, 1.0), (-1.5, 3.0, 1.0)],
                (0.0, 0.0, 1.0))
        picture(batch, keep, textures[1],
                [(-1.0, 3.0, 0.5), (1.0, 3.0, 0.5), (1.0, 1.5, 0.5), (-1.0, 1.5, 0.5)],
                (0.0, 0.0, 1.0))
        picture(batch, keep, textures[2],
                [(-1.0, 3.0, -0.5), (1.0, 3.0, -0.5), (1.0, 1.5, -0.5), (-1.0, 1.5, -0.5)],
                (0.0, 0.0, -1.0))
        caption_x = (140 if lesson.words else 175) / 500 * window.width
        keep.append(pyglet.text.Label(
            lesson.label(), font_size=18, x=caption_x, y=0.8 * window.height,
            color=(255, 0, 0, 255), batch=batch))
        batch.draw()

    def idle(dt: float) -> None:
        if not lesson.idle_active:
            return
        try:
            if not lesson.words:
                _ask_text(lesson)
                return
            for _ in range(max(1, round(dt * TICKS_PER_SECOND))):
                announced = lesson.tick()
                if announced is not None:
                    _say(f" {announced} ")
                if lesson.rejected is not None:
                    _say(f"ひらがなで正しく入力してね：{lesson.rejected}\n")
                    lesson.rejected = None
                    break
                if lesson.completed is not None:
                    _finish(lesson.completed)
                    lesson.completed = None
                    break
        except EOFError:
            window.close()
            pyglet.app.exit()

    @window.event
    def on_text(text: str):
        for char in text:
            if char == "R":
                camera.reset()
            elif char == " ":
                lesson._toggle()

    @window.event
    def on_key_press(symbol, modifiers):
        if symbol == key.ESCAPE:
            window.close()
            pyglet.app.exit()
            return pyglet.event.EVENT_HANDLED
        return None

    buttons: Dict[int, int] = {
        mouse.LEFT: LEFT_BUTTON, mouse.MIDDLE: MIDDLE_BUTTON, mouse.RIGHT: RIGHT_BUTTON,
    }

    @window.event
    def on_mouse_drag(x, y, dx, dy, pressed, modifiers):
        if lesson.words:
            for flag, button in buttons.items():
                if pressed & flag:
                    camera.drag(button, dx, -dy)
                    break

    pyglet.clock.schedule_interval(idle, 1 / 120)
    pyglet.app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())