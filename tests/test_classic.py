import pytest

from tebata.app import LEFT_BUTTON, MIDDLE_BUTTON, RIGHT_BUTTON, TICKS_PER_MOTION
from tebata.classic import (
    IDLE_CAPTION,
    INPUT_LENGTH,
    ClassicCamera,
    ClassicLesson,
    main,
)
from tebata.signals import REST_WRISTS, Hand, romaji, wrist_position


def _run(lesson, ticks):
    return [lesson.tick() for _ in range(ticks)]


def test_camera_starts_at_source_view():
    camera = ClassicCamera()
    assert camera.distance == 20.0
    assert camera.elevation == -15.0
    assert camera.twist == 0.0
    assert camera.azimuth == 0.0


def test_camera_reset_undoes_drags():
    camera = ClassicCamera()
    camera.drag(LEFT_BUTTON, 10, 6)
    camera.drag(RIGHT_BUTTON, 4, 8)
    camera.drag(MIDDLE_BUTTON, 30, 0)
    assert camera != ClassicCamera()
    camera.reset()
    assert camera == ClassicCamera()


def test_left_drag_turns_azimuth_and_elevation():
    camera = ClassicCamera()
    camera.drag(LEFT_BUTTON, 4, 2)
    assert camera.azimuth == 2.0
    assert camera.elevation == -16.0


def test_middle_drag_wraps_twist():
    camera = ClassicCamera()
    camera.drag(MIDDLE_BUTTON, 370, 0)
    assert camera.twist == 10.0


def test_right_drag_changes_distance_and_twist():
    camera = ClassicCamera()
    camera.drag(RIGHT_BUTTON, 0, 40)
    assert camera.distance < ClassicCamera().distance
    assert camera.twist == 0.0


def test_idle_lesson_does_nothing():
    lesson = ClassicLesson()
    assert lesson.tick() is None
    assert lesson.label() == IDLE_CAPTION
    assert lesson.wrist(Hand.RIGHT) == REST_WRISTS[Hand.RIGHT]


def test_start_truncates_to_input_length():
    lesson = ClassicLesson()
    lesson.start("あ" * 20)
    assert lesson.text == "あ" * INPUT_LENGTH


def test_start_keeps_only_first_line():
    lesson = ClassicLesson()
    lesson.start("のあ\nいう")
    assert lesson.text == "のあ"


def test_start_rejects_empty_line():
    with pytest.raises(ValueError):
        ClassicLesson().start("\n")


def test_first_tick_announces_and_shows_romaji():
    lesson = ClassicLesson()
    lesson.start("あ")
    assert lesson.tick() == "あ"
    assert lesson.label() == "A"


def test_wrist_follows_signal_table():
    lesson = ClassicLesson()
    lesson.start("あ")
    lesson.tick()
    for hand in Hand:
        assert lesson.wrist(hand) == wrist_position(hand, "あ", 0)


def test_character_completes_after_its_motions():
    lesson = ClassicLesson()
    lesson.start("あ")
    _run(lesson, 3 * TICKS_PER_MOTION - 1)
    assert lesson.words is True
    assert lesson.completed is None
    lesson.tick()
    assert lesson.completed == "あ"
    assert lesson.words is False
    assert lesson.revolving is True
    assert lesson.label() == IDLE_CAPTION


def test_second_character_is_announced_after_first():
    lesson = ClassicLesson()
    lesson.start("のあ")
    announced = [a for a in _run(lesson, 2 * TICKS_PER_MOTION + 1) if a is not None]
    assert announced == ["の", "あ"]
    assert lesson.label() == romaji("の") + romaji("あ")


def test_unknown_character_holds_rest_pose_then_stops():
    lesson = ClassicLesson()
    lesson.start("xあ")
    assert lesson.tick() == "x"
    assert lesson.label() == "//"
    assert lesson.wrist(Hand.LEFT) == REST_WRISTS[Hand.LEFT]
    _run(lesson, TICKS_PER_MOTION - 1)
    assert lesson.rejected == "x"
    assert lesson.words is False
    assert lesson.completed is None


def test_restart_clears_previous_run():
    lesson = ClassicLesson()
    lesson.start("あ")
    _run(lesson, 3 * TICKS_PER_MOTION)
    lesson.start("の")
    assert lesson.completed is None
    assert lesson.index == 0
    assert lesson.tick() == "の"
    assert lesson.label() == romaji("の")


def test_main_fails_without_textures(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert "Error!" in capsys.readouterr().out