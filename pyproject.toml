[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xionfee"
version = "0.1.0"
description = "Global minimum fee rules, fee parameters, genesis editing and mint checks for a Cosmos-style chain"
requires-python = ">=3.10"
dependencies = []
keywords = ["fees", "gas", "globalfee", "cosmos", "blockchain", "genesis", "mint"]
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
    "Topic :: Office/Business :: Financial",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xionfee"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
