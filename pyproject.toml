[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taubounds"
version = "0.1.0"
description = "Bounds on (weighted) Kendall's tau between rankings with ties, with tools to build, verify and compare solver results."
requires-python = ">=3.10"
dependencies = [
    "tqdm",
]
keywords = [
    "kendall",
    "tau",
    "rank correlation",
    "ties",
    "partial order",
    "linear extension",
    "ranking",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
taubounds-tau = "taubounds.tau_cli:main"
taubounds-solve = "taubounds.solver_cli:main"
taubounds-bf = "taubounds.solver_cli:bf_main"
taubounds-rtc = "taubounds.reference:main"
taubounds-verify = "taubounds.verifier_cli:main"
taubounds-compare = "taubounds.compare:main"
taubounds-eval = "taubounds.evaluate:main"

[tool.hatch.build.targets.wheel]
packages = ["taubounds"]

[tool.pytest.ini_options]
testpaths = ["tests"]
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
