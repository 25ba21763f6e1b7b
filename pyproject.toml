[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sparsecs"
version = "0.1.0"
description = "Compressed sparse matrices (CSR/CSC) with sparse products, Kronecker products, triangular solves and mesh Laplacians"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["sparse", "matrix", "csr", "csc", "linear-algebra", "triangular-solve"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sparsecs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
