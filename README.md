# tebata

A small trainer for Japanese kana flag semaphore (手旗信号). A robot
standing on a grid holds a red flag in its right hand and a grey one in
its left, and signals the hiragana you type, one pose at a time, while the
romaji of each character appears above it.

## Installing

```
pip install .
```

The window is drawn with pyglet. The robot's face and body pictures are
read from `face.bmp`, `body1.bmp` and `body2.bmp` in the working
directory; they must be 8-bit or 4-bit palette BMPs. If one is missing or
unreadable the command prints `Error! : <name>` and exits.

## Running

```
tebata
```

The instructor greets you in the terminal and asks you to choose:

1. flag semaphore mode: type a line of hiragana (the first ten characters
   are used, for example `あいう`). Any character without a signal is
   reported and you are asked again. The robot holds each pose for a
   while, rings the terminal bell as each character begins, and tells you
   when the whole line is done; then it asks for another line.
2. running mode: walk the robot around the field.

Keys in the window:

| key | action |
| --- | --- |
| `w` `a` `s` `d` | step forward, left, back, right (not while choosing); legs swing until the key is released |
| `R` | reset the camera and the robot's position |
| `c` | go back to the mode choice |
| space | pause or resume the lesson |
| Esc | end the lesson |

While running or signalling, dragging with the left mouse button orbits the
camera, the middle button twists it, and the right button zooms and twists.

An earlier, simpler lesson, without walking, flags or the mode menu, is
available as:

```
tebata-classic
```

It takes up to nine characters per line. A character without a signal is
shown with a placeholder and stops the signalling with a message, after
which a new line is asked for.

## Copying a 24-bit BMP

```
tebata-bmpcopy original.bmp copy.bmp
```

reads an uncompressed 24-bit BMP and writes its pixels back out with the
same header fields. Other colour depths, compressed images, images over
2000 × 2000 pixels and headers whose data offset does not match are
refused with an error.

## Using the library

```python
from tebata.signals import Hand, romaji, wrist_position, invalid_chars

romaji("か")                         # "Ka"
wrist_position(Hand.RIGHT, "あ", 0)  # (-2.75, 2.5, 0.25)
invalid_chars("あいa")               # ["a"]
```

- `tebata.signals`: the kana table (`find_word`, `FlagWord`), wrist
  positions per pose (`wrist_position`, `classic_wrist_position`) and
  `romaji`; unknown characters raise `UnknownCharacter`.
- `tebata.robot`: limb segments (`segment_between`), the flag held at a
  wrist (`flag_corners`), walking (`leg_swing`, `Robot`) and the ground
  grids (`ground_grid`, `classic_ground_grid`).
- `tebata.shapes`: vertex data for `circle`, `disc`, `solid_cylinder` and
  `wire_cylinder`.
- `tebata.story`: the banners around the instructor's lines.
- `tebata.bitmap`: `read_rgba` for palette BMPs, and `read_truecolor`,
  `write_truecolor` and `copy_truecolor` for 24-bit images.
- `tebata.app` and `tebata.classic`: the lesson state (`Lesson`,
  `ClassicLesson`) and cameras (`Camera`, `ClassicCamera`) behind the two
  commands.

## Limitations

The scene is drawn as flat shapes projected onto the window: there is no
lighting or depth buffer, limbs are lines, boxes are their outlines, and
the face and body pictures are stretched to the bounding box of their
faces. The lesson's text prompts are read from the terminal, not from the
window.