[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rainrate"
version = "1.0.0"
description = "Rain rate model with a BMI-style interface: converts accumulated precipitation and air temperature into a precipitation rate and back"
requires-python = ">=3.10"
dependencies = []
keywords = ["bmi", "hydrology", "precipitation", "rain rate", "model"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Hydrology",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rainrate = "rainrate.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["rainrate"]

[tool.pytest.ini_options]
addopts = "-ra"
