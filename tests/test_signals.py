import pytest

from tebata.signals import (
    FLAG_LOCATIONS,
    REST_WRISTS,
    WORDS,
    Hand,
    UnknownCharacter,
    classic_wrist_position,
    find_word,
    invalid_chars,
    romaji,
    wrist_position,
)


def test_every_word_is_found_by_its_char():
    for word in WORDS:
        assert find_word(word.char) is word


def test_table_chars_are_unique():
    chars = [word.char for word in WORDS]
    found = {id(find_word(char)) for char in chars}
    assert len(found) == len(WORDS)
    assert invalid_chars("".join(chars)) == []


def test_find_word_unknown_raises():
    with pytest.raises(UnknownCharacter):
        find_word("x")


def test_find_word_romaji():
    assert find_word("し").romaji == "Shi"
    assert find_word("ー").romaji == "-"


def test_invalid_chars_lists_unknown_in_order():
    assert invalid_chars("あいう") == []
    assert invalid_chars("aいb") == ["a", "b"]


def test_wrist_position_plain():
    # あ starts with pose 9 whose right hand goes to location 6.
    assert wrist_position(Hand.RIGHT, "あ", 0) == FLAG_LOCATIONS[6][Hand.RIGHT]
    assert wrist_position(Hand.LEFT, "あ", 0) == FLAG_LOCATIONS[7][Hand.LEFT]


def test_wrist_position_reversed_swaps_hands():
    # い motion 1 and え motion 1 both use pose 2; え reverses it.
    assert wrist_position(Hand.RIGHT, "い", 1) == FLAG_LOCATIONS[4][Hand.RIGHT]
    assert wrist_position(Hand.RIGHT, "え", 1) == (-1.25, 0.75, 0.5)
    assert wrist_position(Hand.LEFT, "え", 1) == FLAG_LOCATIONS[4][Hand.LEFT]


def test_wrist_position_end_of_sequence_is_none():
    assert wrist_position(Hand.RIGHT, "に", 2) is None
    assert wrist_position(Hand.LEFT, "ぢ", 2) is None


def test_separator_pose_is_location_zero():
    for hand in Hand:
        assert wrist_position(hand, "の", 1) == FLAG_LOCATIONS[0][hand]


def test_wrist_position_bad_motion():
    with pytest.raises(ValueError):
        wrist_position(Hand.RIGHT, "あ", 5)


def test_wrist_position_unknown_char():
    with pytest.raises(UnknownCharacter):
        wrist_position(Hand.RIGHT, "z", 0)


def test_classic_unknown_gives_rest():
    assert classic_wrist_position(Hand.RIGHT, "z", 0) == REST_WRISTS[Hand.RIGHT]
    assert classic_wrist_position(Hand.LEFT, "z", 0) == (2.23, 1.26, 0.25)


def test_classic_agrees_for_known_chars():
    for word in WORDS:
        for motion in range(5):
            for hand in Hand:
                assert classic_wrist_position(hand, word.char, motion) == wrist_position(
                    hand, word.char, motion
                )


def test_romaji():
    assert romaji("つ") == "TSu"
    assert romaji("q") == "//"