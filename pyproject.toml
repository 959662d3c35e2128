[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tebata"
version = "1.0.0"
description = "A robot that teaches Japanese kana flag semaphore (tebata shingō)"
requires-python = ">=3.10"
dependencies = [
    "pyglet",
]
keywords = ["semaphore", "flag", "hiragana", "tebata", "education", "robot", "bmp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Environment :: Win32 (MS Windows)",
    "Intended Audience :: Education",
    "Natural Language :: Japanese",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education :: Computer Aided Instruction (CAI)",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tebata = "tebata.app:main"
tebata-classic = "tebata.classic:main"
tebata-bmpcopy = "tebata.bitmap:main"

[tool.hatch.build.targets.wheel]
packages = ["tebata"]

[tool.pytest.ini_options]
addopts = "-ra"
