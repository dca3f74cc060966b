[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vanetnode"
version = "0.1.0"
description = "Building blocks for vehicular network nodes: raw link devices, TUN endpoints, traffic counters and node configuration"
requires-python = ">=3.10"
dependencies = []
keywords = ["vanet", "networking", "tun", "raw-socket", "obu", "rsu", "asyncio"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: System :: Networking",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["vanetnode"]

[tool.hatch.build.targets.sdist]
include = ["vanetnode", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
