[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hackcon"
version = "0.1.0"
description = "Core pieces of a hackable emulator console: memory regions, snapshots, cheat search filters, address sets, Z80 instruction info, a life cycle state machine, timers, performance counters and a bounded log."
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "cheats", "memory", "z80", "debugger", "snapshot"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Software Development :: Debuggers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hackcon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
