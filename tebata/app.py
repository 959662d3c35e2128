"""Flag-semaphore lesson: a robot signals hiragana with two flags."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Tuple

from .bitmap import BitmapError, read_rgba
from .robot import FEET, HIPS, RANGE, SHOULDERS, Robot, ground_grid
from .signals import (
    MOTIONS,
    REST_WRISTS,
    Hand,
    Point,
    UnknownCharacter,
    find_word,
    invalid_chars,
    romaji,
    wrist_position,
)
from .story import close_banner, framed, open_banner

INPUT_LENGTH = 10
"""Most characters taken from one line of input."""

TICKS_PER_MOTION = 500
"""Idle ticks each pose is held for."""

TICKS_PER_SECOND = 250

LEFT_BUTTON = 0
MIDDLE_BUTTON = 1
RIGHT_BUTTON = 2

TEXTURES = ("face.bmp", "body1.bmp", "body2.bmp")
WINDOW_SIZE = 750
LIGHT_POSITION = (4.0, 8.0, 15.0)

INTRO = (
    "よく来た新人！\nここは海兵手旗信号講座の会場である！！\nここに来てくれたこと心嬉しく思う！！",
    "新人には2つ選択肢がある！！！\n1つ目は早速「手旗信号を学ぶ」、\n2つ目はウォーミングアップとしての「走り込み」",
)
CHOICE_PROMPT = "さぁ！どちらを選ぶ！(1：手旗信号モード　2：走り込みモード)\t※半角数字\n → "
RUNNING = "走り込み中\n走り込みを止めるときは「cボタン」"
STOP_RUNNING = "(お散歩。。。)\n新人！もう走り込みは終わったか？\nそろそろ本題へ移るか"
FAREWELL = "以上で本講義を終わりにする！解散！"


class Mode(IntEnum):
    """What the lesson is doing."""

    SELECT = 0
    FLAG = 1
    PLAY = 2


@dataclass
class Camera:
    """Orbiting camera looking at the robot."""

    distance: float = RANGE * 4 / 3
    twist: float = 0.0
    elevation: float = -15.0
    azimuth: float = 0.0

    def reset(self) -> None:
        """Back to the starting view."""
        self.distance = RANGE * 4 / 3
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


class Lesson:
    """State of the lesson: mode choice and the signalling of a text."""

    def __init__(self) -> None:
        self.mode = Mode.SELECT
        self.text = ""
        self.index = 0
        self.motion = 0
        self.frames = 0
        self.shown = ""
        self.words = False
        self.revolving = False
        self.idle_active = True
        self.completed: Optional[str] = None

    def choose(self, choice: int) -> Mode:
        """Pick signalling (1) or running (2); anything else is refused."""
        try:
            mode = Mode(choice)
        except ValueError:
            mode = Mode.SELECT
        if mode is Mode.SELECT:
            raise ValueError(f"選択肢は2つだ！それ以外認めない！！：{choice}")
        self.mode = mode
        return mode

    def start(self, text: str) -> None:
        """Begin signalling the first line of ``text`` (at most 10 characters)."""
        line = text.split("\n", 1)[0][:INPUT_LENGTH]
        bad = invalid_chars(line)
        if bad:
            raise UnknownCharacter(bad[0])
        if not line:
            raise ValueError("nothing to signal")
        self.text = line
        self.index = 0
        self.motion = 0
        self.frames = 0
        self.shown = ""
        self.completed = None
        self.words = True
        self.revolving = not self.revolving

    def tick(self) -> Optional[str]:
        """Advance one idle tick; returns the kana whose signal has just begun."""
        if self.mode is not Mode.FLAG or not self.words:
            return None
        announced = None
        if self.motion == 0 and self.frames == 0:
            announced = self.text[self.index]
            self.shown += romaji(announced)
        self.frames += 1
        if self.frames == TICKS_PER_MOTION:
            self.frames = 0
            self.motion += 1
            if self.motion >= MOTIONS or wrist_position(
                Hand.RIGHT, self.text[self.index], self.motion
            ) is None:
                self.index += 1
                self.motion = 0
            if self.index >= len(self.text):
                self.completed = self.text
                self.text = ""
                self.shown = ""
                self.index = 0
                self.words = False
                self.revolving = not self.revolving
        return announced

    def wrist(self, hand: int) -> Point:
        """Where ``hand``'s wrist is right now."""
        hand = Hand(hand)
        if self.words:
            point = wrist_position(hand, self.text[self.index], self.motion)
            if point is not None:
                return point
        return REST_WRISTS[hand]

    @property
    def caption(self) -> str:
        """Large text shown above the robot."""
        return self.shown if self.words else "Robo-ta"

    def status_text(self) -> str:
        """Status line at the top of the window, or an empty string."""
        if self.mode is Mode.PLAY:
            return "Walking"
        if not self.revolving and not self.words:
            return "Waiting for input"
        if not self.revolving:
            return "STOP"
        return ""

    def _toggle(self) -> None:
        self.revolving = not self.revolving
        self.idle_active = self.revolving


# --- projection -----------------------------------------------------------

_FOCAL = 1.0 / math.tan(math.radians(30.0))
_NEAR = 1.0


def _model(point: Point, robot: Robot) -> Point:
    x, y, z = point
    a = math.radians(robot.angle)
    x, z = x * math.cos(a) + z * math.sin(a), -x * math.sin(a) + z * math.cos(a)
    px, py, pz = robot.position
    return (x + px, y + py, z + pz)


def _view(point: Point, camera: Camera, follow_x: float) -> Point:
    x, y, z = point
    a = math.radians(-camera.azimuth)
    x, z = x * math.cos(a) + z * math.sin(a), -x * math.sin(a) + z * math.cos(a)
    b = math.radians(-camera.elevation)
    y, z = y * math.cos(b) - z * math.sin(b), y * math.sin(b) + z * math.cos(b)
    c = math.radians(-camera.twist)
    x, y = x * math.cos(c) - y * math.sin(c), x * math.sin(c) + y * math.cos(c)
    return (x - follow_x * 2 / 3, y, z - camera.distance)


def _project(view: Point, width: int, height: int) -> Optional[Tuple[float, float, float]]:
    x, y, z = view
    if -z < _NEAR:
        return None
    aspect = width / height
    sx = (_FOCAL / aspect * x / -z + 1.0) * width / 2
    sy = (_FOCAL * y / -z + 1.0) * height / 2
    return sx, sy, _FOCAL / -z * height / 2


def _hull(points: List[Tuple[float, float]]) -> List[Tuple[float, float]]:
    pts = sorted(set(points))
    if len(pts) < 3:
        return pts

    def cross(o, a, b):
        return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])

    lower: List[Tuple[float, float]] = []
    for p in pts:
        while len(lower) >= 2 and cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)
    upper: List[Tuple[float, float]] = []
    for p in reversed(pts):
        while len(upper) >= 2 and cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)
    return lower[:-1] + upper[:-1]


# --- console dialogue -----------------------------------------------------

def _say(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _ask_mode(lesson: Lesson) -> None:
    while True:
        _say(open_banner())
        _say(CHOICE_PROMPT)
        answer = input()
        _say(close_banner())
        try:
            choice = int(answer.strip())
        except ValueError:
            _say(f"\n選択肢は2つだ！それ以外認めない！！：{answer.strip()}\n")
            continue
        try:
            mode = lesson.choose(choice)
        except ValueError as exc:
            _say(f"\n{exc}\n")
            continue
        if mode is Mode.PLAY:
            _say(framed(RUNNING))
        return


def _ask_text(lesson: Lesson) -> None:
    while True:
        _say(open_banner())
        _say(f"\nさぁ！知りたい文字列を言ってみろ！（ひらがな{INPUT_LENGTH}字ずつ表示）\n → ")
        text = input()[:INPUT_LENGTH]
        bad = invalid_chars(text)
        for char in bad:
            _say(f"ひらがなではっきり言え！！：{char}\n")
        if not bad and text:
            lesson.start(text)
            _say(open_banner())
            return
        _say(close_banner())


def _finish(text: str) -> None:
    _say("\a")
    _say(close_banner())
    _say(open_banner())
    _say(f"\nこれが「{text}」の手旗信号だ！覚えたか！！\n")
    _say(close_banner())


# --- window ---------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the lesson window and run until Escape is pressed."""
    args = list(sys.argv if argv is None else ["tebata", *argv])
    title = args[0] if args else "tebata"

    images = []
    for name in TEXTURES:
        try:
            images.append(read_rgba(name))
        except BitmapError:
            print(f"Error! : {name}")
            return 1

    import pyglet
    from pyglet.window import key, mouse

    lesson = Lesson()
    camera = Camera()
    robot = Robot()
    window = pyglet.window.Window(WINDOW_SIZE, WINDOW_SIZE, caption=title, resizable=True)
    pyglet.gl.glClearColor(0.0, 0.25, 0.75, 1.0)
    textures = [
        pyglet.image.ImageData(w, h, "RGBA", data) for w, h, data in images
    ]

    for line in INTRO:
        _say(framed(line))

    def screen(point: Point, local: bool = True):
        world = _model(point, robot) if local else point
        return _project(
            _view(world, camera, robot.position[0]), window.width, window.height
        )

    def facing(center: Point, normal: Point) -> bool:
        tip = tuple(c + n for c, n in zip(center, normal))
        a = _view(_model(center, robot), camera, robot.position[0])
        b = _view(_model(tip, robot), camera, robot.position[0])
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
            keep.append(
                pyglet.shapes.Circle(p[0], p[1], max(radius * p[2], 1.0), color=color, batch=batch)
            )

    def line(batch, keep, a: Point, b: Point, thickness: float, color, local=True) -> None:
        pa, pb = screen(a, local), screen(b, local)
        if pa is None or pb is None:
            return
        width = max(thickness * (pa[2] + pb[2]) / 2, 1.0)
        keep.append(pyglet.shapes.Line(pa[0], pa[1], pb[0], pb[1], width, color=color, batch=batch))

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
        sprite.scale_x = max(xs) - min(xs) or 1.0
        sprite.scale_x /= image.width
        sprite.scale_y = (max(ys) - min(ys) or 1.0) / image.height
        keep.append(sprite)

    grey = (204, 204, 204)

    @window.event
    def on_draw():
        window.clear()
        robot.set_wrists(lesson.wrist(Hand.RIGHT), lesson.wrist(Hand.LEFT))
        batch = pyglet.graphics.Batch()
        keep: list = []
        for a, b in ground_grid():
            line(batch, keep, a, b, 0.02, (255, 255, 255), local=False)
        ball(batch, keep, LIGHT_POSITION, 1.0, (255, 255, 0), local=False)
        for hand in Hand:
            line(batch, keep, HIPS[hand], robot.feet[hand], 0.5, grey)
            ball(batch, keep, robot.feet[hand], 0.3, grey)
        box(batch, keep, (0.0, 2.25, 0.0), (2.0, 1.5, 0.99), grey)
        for hand in Hand:
            wrist = robot.wrists[hand]
            line(batch, keep, SHOULDERS[hand], wrist, 0.5, grey)
            try:
                tip, far, near = robot.flag(hand)
            except ValueError:
                tip = None
            if tip is not None:
                corners = [screen(p) for p in (wrist, tip, far, near)]
                if all(c is not None for c in corners):
                    color = (255, 0, 0) if hand is Hand.RIGHT else grey
                    keep.append(
                        pyglet.shapes.Polygon(
                            *[(c[0], c[1]) for c in corners], color=color, batch=batch
                        )
                    )
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
        caption_x = (50 if lesson.words else 175) / 500 * window.width
        keep.append(pyglet.text.Label(
            lesson.caption, font_size=18, x=caption_x, y=0.8 * window.height,
            color=(255, 0, 0, 255), batch=batch))
        status = lesson.status_text()
        if status:
            keep.append(pyglet.text.Label(
                status, font_size=18, x=25 / 750 * window.width,
                y=700 / 750 * window.height, color=(255, 0, 0, 255), batch=batch))
        batch.draw()

    def idle(dt: float) -> None:
        if not lesson.idle_active:
            return
        try:
            if lesson.mode is Mode.SELECT:
                _ask_mode(lesson)
            if lesson.mode is Mode.FLAG:
                if not lesson.words:
                    _ask_text(lesson)
                    robot.walking = False
                    return
                for _ in range(max(1, round(dt * TICKS_PER_SECOND))):
                    announced = lesson.tick()
                    if announced is not None:
                        _say(f"\a {announced} ")
                    if lesson.completed is not None:
                        _finish(lesson.completed)
                        lesson.completed = None
                        break
        except EOFError:
            window.close()
            pyglet.app.exit()

    def walk(dt: float) -> None:
        if robot.walking:
            robot.animate()

    @window.event
    def on_text(text: str):
        for char in text:
            if lesson.mode is not Mode.SELECT and char in "wsda":
                robot.step(char)
            elif char == "R":
                robot.walking = False
                camera.reset()
                robot.reset()
            elif char == "c":
                if lesson.mode is Mode.PLAY:
                    _say(framed(STOP_RUNNING))
                lesson.mode = Mode.SELECT
            elif char == " ":
                lesson._toggle()

    @window.event
    def on_key_press(symbol, modifiers):
        if symbol == key.ESCAPE:
            _say(framed(FAREWELL))
            window.close()
            pyglet.app.exit()
            return pyglet.event.EVENT_HANDLED
        return None

    @window.event
    def on_key_release(symbol, modifiers):
        if symbol in (key.W, key.A, key.S, key.D):
            robot.stop_walking()

    buttons: Dict[int, int] = {
        mouse.LEFT: LEFT_BUTTON, mouse.MIDDLE: MIDDLE_BUTTON, mouse.RIGHT: RIGHT_BUTTON,
    }

    @window.event
    def on_mouse_drag(x, y, dx, dy, pressed, modifiers):
        if lesson.mode is Mode.PLAY or lesson.words:
            for flag, button in buttons.items():
                if pressed & flag:
                    camera.drag(button, dx, -dy)
                    break

    pyglet.clock.schedule_interval(idle, 1 / 120)
    pyglet.clock.schedule_interval(walk, 1 / 60)
    pyglet.app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())