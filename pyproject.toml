[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zaimu"
version = "0.1.0"
description = "Household finance ledger: monthly incomes and outcomes, running savings, balance adjustments and a day-by-day balance forecast."
requires-python = ">=3.10"
dependencies = []
keywords = ["finance", "budget", "ledger", "savings", "forecast", "household"]
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
    "Topic :: Office/Business :: Financial :: Accounting",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zaimu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
