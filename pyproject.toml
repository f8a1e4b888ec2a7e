[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kubewrangle"
version = "0.1.0"
description = "Helpers for Kubernetes-style objects held as dictionaries: object sets, status summaries, name utilities and a schema registry with field mappers."
requires-python = ">=3.10"
dependencies = []
keywords = ["kubernetes", "schema", "mapper", "status", "summary", "objectset"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kubewrangle"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
