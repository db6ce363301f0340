[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "alteredstate"
version = "0.1.0"
description = "Keep named directory scenarios, their snapshots and state, and plan the steps between two directory exports"
requires-python = ">=3.10"
dependencies = []
keywords = ["ldap", "active-directory", "scenarios", "snapshots"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration :: Authentication/Directory :: LDAP",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
altered-state = "alteredstate.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["alteredstate"]

[tool.pytest.ini_options]
addopts = "-ra"
