[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gocoin"
version = "0.1.0"
description = "A small proof-of-work blockchain with an SQLite block store, UTXO transactions and a JSON REST API"
requires-python = ">=3.10"
keywords = ["blockchain", "proof-of-work", "utxo", "cryptocurrency", "rest"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: Flask",
    "Topic :: Office/Business :: Financial",
]
dependencies = [
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gocoin = "gocoin.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gocoin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
