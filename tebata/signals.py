"""Hiragana to flag-semaphore table and wrist-position lookup."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

Point = Tuple[float, float, float]

MOTIONS = 5
"""Number of motion slots each character has."""


class Hand(IntEnum):
    """Which hand holds the flag."""

    RIGHT = 0
    LEFT = 1


class UnknownCharacter(KeyError):
    """Raised for a character that has no flag signal."""

    def __init__(self, char: str) -> None:
        super().__init__(char)
        self.char = char

    def __str__(self) -> str:
        return f"no flag signal for {self.char!r}"


@dataclass(frozen=True)
class FlagWord:
    """One kana with its sequence of poses (0 ends the sequence early)."""

    char: str
    motions: Tuple[int, int, int, int, int]
    reverse: Tuple[int, int, int, int, int]
    romaji: str


_NO_REVERSE = (0, 0, 0, 0, 0)
_REVERSE_SECOND = (0, 1, 0, 0, 0)

WORDS: Tuple[FlagWord, ...] = tuple(
    FlagWord(char, motions, reverse, roma)
    for char, motions, reverse, roma in (
        ("あ", (9, 3, 16, 0, 0), _NO_REVERSE, "A"),
        ("い", (3, 2, 16, 0, 0), _NO_REVERSE, "I"),
        ("う", (6, 9, 16, 0, 0), _NO_REVERSE, "U"),
        ("え", (1, 2, 1, 16, 0), _REVERSE_SECOND, "E"),
        ("お", (1, 2, 3, 16, 0), _NO_REVERSE, "O"),
        ("か", (8, 3, 16, 0, 0), _NO_REVERSE, "Ka"),
        ("き", (6, 2, 16, 0, 0), _NO_REVERSE, "Ki"),
        ("く", (11, 12, 16, 0, 0), _NO_REVERSE, "Ku"),
        ("け", (7, 3, 16, 0, 0), _NO_REVERSE, "Ke"),
        ("こ", (8, 1, 16, 0, 0), _NO_REVERSE, "Ko"),
        ("さ", (1, 13, 16, 0, 0), _NO_REVERSE, "Sa"),
        ("し", (5, 7, 16, 0, 0), _NO_REVERSE, "Shi"),
        ("す", (1, 2, 5, 16, 0), _NO_REVERSE, "Su"),
        ("せ", (9, 7, 16, 0, 0), _NO_REVERSE, "Se"),
        ("そ", (5, 3, 16, 0, 0), _NO_REVERSE, "So"),
        ("た", (11, 12, 5, 16, 0), _NO_REVERSE, "Ta"),
        ("ち", (7, 2, 16, 0, 0), _REVERSE_SECOND, "Chi"),
        ("つ", (13, 3, 16, 0, 0), _NO_REVERSE, "TSu"),
        ("て", (6, 3, 16, 0, 0), _NO_REVERSE, "Te"),
        ("と", (2, 5, 16, 0, 0), _NO_REVERSE, "To"),
        ("な", (1, 3, 16, 0, 0), _NO_REVERSE, "Na"),
        ("に", (6, 16, 0, 0, 0), _NO_REVERSE, "Ni"),
        ("ぬ", (9, 4, 16, 0, 0), _NO_REVERSE, "Nu"),
        ("ね", (9, 2, 1, 16, 0), _NO_REVERSE, "Ne"),
        ("の", (3, 16, 0, 0, 0), _NO_REVERSE, "No"),
        ("は", (10, 16, 0, 0, 0), _NO_REVERSE, "Ha"),
        ("ひ", (1, 7, 16, 0, 0), _NO_REVERSE, "Hi"),
        ("ふ", (9, 16, 0, 0, 0), _NO_REVERSE, "Fu"),
        ("へ", (4, 16, 0, 0, 0), _NO_REVERSE, "He"),
        ("ほ", (1, 2, 10, 16, 0), _NO_REVERSE, "Ho"),
        ("ま", (9, 5, 16, 0, 0), _NO_REVERSE, "Ma"),
        ("み", (6, 1, 16, 0, 0), _NO_REVERSE, "Mi"),
        ("む", (7, 5, 16, 0, 0), _NO_REVERSE, "Mu"),
        ("め", (3, 5, 16, 0, 0), _NO_REVERSE, "Me"),
        ("も", (6, 7, 16, 0, 0), _NO_REVERSE, "Mo"),
        ("や", (8, 4, 16, 0, 0), _NO_REVERSE, "Ya"),
        ("ゆ", (9, 1, 16, 0, 0), _NO_REVERSE, "Yu"),
        ("よ", (8, 6, 16, 0, 0), _NO_REVERSE, "Yo"),
        ("ら", (5, 9, 16, 0, 0), _NO_REVERSE, "Ra"),
        ("り", (13, 16, 0, 0, 0), _NO_REVERSE, "Ri"),
        ("る", (3, 7, 16, 0, 0), _NO_REVERSE, "Ru"),
        ("れ", (7, 16, 0, 0, 0), _NO_REVERSE, "Re"),
        ("ろ", (7, 8, 16, 0, 0), _NO_REVERSE, "Ro"),
        ("わ", (2, 9, 16, 0, 0), _NO_REVERSE, "Wa"),
        ("を", (1, 9, 16, 0, 0), _NO_REVERSE, "Wo"),
        ("ん", (5, 1, 16, 0, 0), _NO_REVERSE, "N"),
        ("が", (8, 3, 14, 16, 0), _NO_REVERSE, "Ga"),
        ("ぎ", (6, 2, 14, 16, 0), _NO_REVERSE, "Gi"),
        ("ぐ", (11, 12, 14, 16, 0), _NO_REVERSE, "Gu"),
        ("げ", (7, 3, 14, 16, 0), _NO_REVERSE, "Ge"),
        ("ご", (8, 1, 14, 16, 0), _NO_REVERSE, "Go"),
        ("ざ", (1, 13, 14, 16, 0), _NO_REVERSE, "Za"),
        ("じ", (5, 7, 14, 16, 0), _NO_REVERSE, "Zi"),
        ("ず", (1, 2, 5, 14, 16), _NO_REVERSE, "Zu"),
        ("ぜ", (9, 7, 14, 16, 0), _NO_REVERSE, "Ze"),
        ("ぞ", (5, 3, 14, 16, 0), _NO_REVERSE, "Zo"),
        ("だ", (11, 12, 5, 14, 16), _NO_REVERSE, "Da"),
        ("ぢ", (7, 2, 0, 14, 16), _REVERSE_SECOND, "Di"),
        ("づ", (13, 3, 14, 16, 0), _NO_REVERSE, "Du"),
        ("で", (6, 3, 14, 16, 0), _NO_REVERSE, "De"),
        ("ど", (2, 5, 14, 16, 0), _NO_REVERSE, "Do"),
        ("ば", (10, 14, 16, 0, 0), _NO_REVERSE, "Ba"),
        ("び", (1, 7, 14, 16, 0), _NO_REVERSE, "Bi"),
        ("ぶ", (9, 14, 16, 0, 0), _NO_REVERSE, "Bu"),
        ("べ", (4, 14, 16, 0, 0), _NO_REVERSE, "Be"),
        ("ぼ", (1, 2, 10, 14, 16), _NO_REVERSE, "Bo"),
        ("ぱ", (10, 15, 16, 0, 0), _NO_REVERSE, "Pa"),
        ("ぴ", (1, 7, 15, 16, 0), _NO_REVERSE, "Pi"),
        ("ぷ", (9, 15, 16, 0, 0), _NO_REVERSE, "Pu"),
        ("ぺ", (4, 15, 16, 0, 0), _NO_REVERSE, "Pe"),
        ("ぽ", (1, 2, 10, 15, 16), _NO_REVERSE, "Po"),
        ("ー", (2, 16, 0, 0, 0), _NO_REVERSE, "-"),
    )
)

# Pose number n (1-based) -> (right hand location, left hand location).
FLAG_POSES: Tuple[Tuple[int, int], ...] = (
    (6, 2), (4, 0), (7, 3), (5, 1), (3, 5),
    (6, 5), (4, 2), (6, 0), (6, 7), (5, 3),
    (3, 3), (7, 7), (4, 4), (0, 3), (5, 0),
    (0, 0),
)

# Location index -> (right wrist point, left wrist point).
FLAG_LOCATIONS: Tuple[Tuple[Point, Point], ...] = (
    ((-1.25, 0.75, 0.5), (1.25, 0.75, 0.5)),
    ((0.52, 1.62, 0.5), (2.23, 1.26, 0.25)),
    ((0.75, 2.50, 0.5), (2.75, 2.50, 0.25)),
    ((0.51, 3.38, 1.2), (2.52, 3.38, 0.25)),
    ((-1.88, 4.02, 0.25), (1.88, 4.02, 0.25)),
    ((-2.52, 3.38, 0.25), (-0.51, 3.38, 1.2)),
    ((-2.75, 2.50, 0.25), (-0.75, 2.5, 0.5)),
    ((-2.23, 1.26, 0.25), (-0.52, 1.62, 0.5)),
)

REST_WRISTS = {
    Hand.RIGHT: FLAG_LOCATIONS[7][Hand.RIGHT],
    Hand.LEFT: FLAG_LOCATIONS[1][Hand.LEFT],
}
"""Wrist positions of the robot standing at rest."""

_BY_CHAR = {word.char: word for word in WORDS}


def find_word(char: str) -> FlagWord:
    """Return the table entry for ``char``."""
    try:
        return _BY_CHAR[char]
    except KeyError:
        raise UnknownCharacter(char) from None


def invalid_chars(text: str) -> list:
    """Return, in order, every character of ``text`` without a signal."""
    return [char for char in text if char not in _BY_CHAR]


def wrist_position(hand: int, char: str, motion: int) -> Optional[Point]:
    """Wrist point of ``hand`` in motion ``motion`` of ``char``.

    Returns None where the character's sequence has already ended.
    """
    word = find_word(char)
    if not 0 <= motion < MOTIONS:
        raise ValueError(f"motion must be in 0..{MOTIONS - 1}, got {motion}")
    hand = Hand(hand)
    pose = word.motions[motion]
    if pose == 0:
        return None
    right, left = FLAG_POSES[pose - 1]
    if word.reverse[motion]:
        right, left = left, right
    location = right if hand is Hand.RIGHT else left
    return FLAG_LOCATIONS[location][hand]


def classic_wrist_position(hand: int, char: str, motion: int) -> Optional[Point]:
    """Like :func:`wrist_position`, but an unknown character gives the rest pose."""
    try:
        return wrist_position(hand, char, motion)
    except UnknownCharacter:
        return REST_WRISTS[Hand(hand)]


def romaji(char: str) -> str:
    """Romanised reading of ``char``, or ``"//"`` when it is unknown."""
    word = _BY_CHAR.get(char)
    return word.romaji if word is not None else "//"