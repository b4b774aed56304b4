[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polykern"
version = "0.1.0"
description = "Polyhedral benchmark kernels with a timing harness"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "benchmark",
    "polybench",
    "stencil",
    "floyd-warshall",
    "microbenchmark",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
polykern = "polykern.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["polykern"]

[tool.hatch.build.targets.sdist]
include = ["polykern", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
