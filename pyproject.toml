[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simso"
version = "0.1.0"
description = "A small simulated computer and teaching operating system: CPU, memory, I/O devices, assembler, processes and schedulers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "emulator",
    "simulator",
    "operating-system",
    "scheduler",
    "assembler",
    "education",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
simso = "simso.cli:main"
simso-asm = "simso.assembler:main"

[tool.hatch.build.targets.wheel]
packages = ["simso"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
