[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tamboon"
version = "0.1.0"
description = "Decode ROT-128 donation files and submit each donation as a card charge through the Omise API"
requires-python = ">=3.10"
keywords = ["donations", "omise", "payments", "rot128", "charges"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
]
dependencies = [
    "requests>=2.28",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
tamboon = "tamboon.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tamboon"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
