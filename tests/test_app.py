import pytest

from tebata.app import (
    INPUT_LENGTH,
    LEFT_BUTTON,
    MIDDLE_BUTTON,
    RIGHT_BUTTON,
    TICKS_PER_MOTION,
    Camera,
    Lesson,
    Mode,
)
from tebata.signals import REST_WRISTS, Hand, UnknownCharacter, wrist_position


def run_until_complete(lesson, limit=100_000):
    ticks = 0
    while lesson.completed is None:
        lesson.tick()
        ticks += 1
        assert ticks < limit
    return ticks


def flag_lesson():
    lesson = Lesson()
    lesson.choose(1)
    return lesson


def test_camera_defaults():
    camera = Camera()
    assert camera.distance == pytest.approx(20.0)
    assert camera.elevation == -15.0
    assert camera.twist == 0.0
    assert camera.azimuth == 0.0


def test_camera_reset_after_drags():
    camera = Camera()
    camera.drag(LEFT_BUTTON, 10, 6)
    camera.drag(RIGHT_BUTTON, 4, 40)
    camera.reset()
    assert camera == Camera()


def test_left_drag_is_reversible():
    camera = Camera()
    camera.drag(LEFT_BUTTON, 12, -8)
    assert camera.azimuth > 0
    assert camera.elevation > -15.0
    camera.drag(LEFT_BUTTON, -12, 8)
    assert camera == Camera()


def test_middle_drag_wraps_twist():
    wrapped = Camera()
    wrapped.drag(MIDDLE_BUTTON, 370, 0)
    small = Camera()
    small.drag(MIDDLE_BUTTON, 10, 0)
    assert wrapped.twist == pytest.approx(small.twist)
    assert 0 <= wrapped.twist < 360


def test_right_drag_moves_closer():
    camera = Camera()
    camera.drag(RIGHT_BUTTON, 0, 40)
    assert camera.distance < Camera().distance
    assert camera.twist == 0.0


def test_unknown_button_changes_nothing():
    camera = Camera()
    camera.drag(7, 30, 30)
    assert camera == Camera()


def test_choose_modes():
    assert Lesson().choose(1) is Mode.FLAG
    assert Lesson().choose(2) is Mode.PLAY


@pytest.mark.parametrize("choice", [0, 3, -1])
def test_choose_refuses_other_numbers(choice):
    lesson = Lesson()
    with pytest.raises(ValueError):
        lesson.choose(choice)
    assert lesson.mode is Mode.SELECT


def test_start_rejects_unknown_characters():
    lesson = flag_lesson()
    with pytest.raises(UnknownCharacter):
        lesson.start("あx")
    assert lesson.words is False


def test_start_rejects_empty_text():
    with pytest.raises(ValueError):
        flag_lesson().start("")


def test_start_truncates_long_input():
    lesson = flag_lesson()
    lesson.start("あ" * (INPUT_LENGTH + 2))
    assert lesson.text == "あ" * INPUT_LENGTH


def test_start_takes_first_line_only():
    lesson = flag_lesson()
    lesson.start("あい\nう")
    assert lesson.text == "あい"


def test_first_tick_announces_character():
    lesson = flag_lesson()
    lesson.start("あい")
    assert lesson.tick() == "あ"
    assert lesson.shown == "A"
    assert lesson.tick() is None


def test_wrist_follows_motion():
    lesson = flag_lesson()
    lesson.start("あ")
    assert lesson.wrist(Hand.RIGHT) == wrist_position(Hand.RIGHT, "あ", 0)
    for _ in range(TICKS_PER_MOTION):
        lesson.tick()
    assert lesson.motion == 1
    assert lesson.wrist(Hand.LEFT) == wrist_position(Hand.LEFT, "あ", 1)


def test_wrist_at_rest_without_text():
    lesson = Lesson()
    assert lesson.wrist(Hand.RIGHT) == REST_WRISTS[Hand.RIGHT]
    assert lesson.wrist(Hand.LEFT) == REST_WRISTS[Hand.LEFT]


def test_single_character_lesson_completes():
    lesson = flag_lesson()
    lesson.start("あ")
    ticks = run_until_complete(lesson)
    assert ticks == 3 * TICKS_PER_MOTION
    assert lesson.completed == "あ"
    assert lesson.words is False
    assert lesson.revolving is False
    assert lesson.shown == ""


def test_sequence_stops_at_empty_pose():
    lesson = flag_lesson()
    lesson.start("ぢあ")
    for _ in range(2 * TICKS_PER_MOTION):
        lesson.tick()
    assert lesson.index == 1
    assert lesson.motion == 0


def test_romaji_accumulates():
    lesson = flag_lesson()
    lesson.start("あい")
    announced = []
    while lesson.completed is None:
        char = lesson.tick()
        if char is not None:
            announced.append(char)
        if lesson.words:
            shown = lesson.shown
    assert announced == ["あ", "い"]
    assert shown == "AI"


def test_tick_does_nothing_outside_flag_mode():
    lesson = Lesson()
    assert lesson.tick() is None
    assert lesson.frames == 0


def test_status_text_changes():
    lesson = flag_lesson()
    assert lesson.caption == "Robo-ta"
    assert lesson.status_text() == "Waiting for input"
    lesson.start("あ")
    assert lesson.status_text() == ""
    lesson.revolving = False
    assert lesson.status_text() == "STOP"
    lesson.revolving = True
    run_until_complete(lesson)
    assert lesson.status_text() == "Waiting for input"


def test_status_text_walking():
    lesson = Lesson()
    lesson.choose(2)
    assert lesson.status_text() == "Walking"
    assert lesson.caption == "Robo-ta"