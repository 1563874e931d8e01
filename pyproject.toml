[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zkcircuit"
version = "0.1.0"
description = "Rank-1 constraint systems, boolean gadgets and radix-2 polynomial domains over the BLS12-381 scalar field"
requires-python = ">=3.10"
dependencies = []
keywords = ["zk-snark", "r1cs", "constraint-system", "gadgets", "fft", "bls12-381"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zkcircuit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
