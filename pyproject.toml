[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gost"
version = "0.1.0"
description = "Byte buffers, buffer pools, an LRU cache, queues, channels and synchronisation helpers for threaded programs"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "buffer",
    "pool",
    "lru",
    "cache",
    "queue",
    "semaphore",
    "channel",
    "batcher",
    "threading",
]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gost"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
