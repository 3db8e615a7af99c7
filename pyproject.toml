[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "satproof"
version = "0.1.0"
description = "SAT solver building blocks, gate-to-CNF encoding and a resolution-proof verifier for DIMACS CNF instances"
requires-python = ">=3.10"
dependencies = []
keywords = ["sat", "cnf", "dimacs", "resolution", "proof", "unsat-core", "heap"]
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
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
satproof-verify = "satproof.verifier:main"

[tool.hatch.build.targets.wheel]
packages = ["satproof"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
