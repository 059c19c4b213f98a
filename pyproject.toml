[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "filewatcher"
version = "1.0.0"
description = "Watch files and directories for changes and notify listeners immediately or through a deferred queue."
requires-python = ">=3.10"
dependencies = [
    "watchdog",
]
keywords = ["filesystem", "watcher", "monitoring", "events", "listener"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["filewatcher"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
