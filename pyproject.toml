[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pingshow"
version = "0.1.0"
description = "A ping-pong match simulation with player statistics and a CSV match log"
requires-python = ">=3.11"
dependencies = []
keywords = ["simulation", "ping-pong", "game", "asyncio", "csv"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
pingshow = "pingshow.client:main"

[tool.hatch.build.targets.wheel]
packages = ["pingshow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
strict = true
