[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rfsensors"
version = "0.1.0"
description = "Decoders and encoders for raw 433/868 MHz pulse trains from weather sensors, doorbells, alarm sensors and smoke detectors"
requires-python = ">=3.10"
dependencies = []
keywords = ["rf", "433mhz", "868mhz", "weather station", "doorbell", "smoke detector", "home automation", "pulse decoding"]
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
    "Topic :: Home Automation",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rfsensors"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
