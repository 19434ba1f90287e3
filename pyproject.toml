[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "primetracker"
version = "0.1.0"
description = "Track the recipes, components and relic drop sources for Warframe items you are building."
requires-python = ">=3.10"
keywords = ["warframe", "prime", "relics", "recipes", "tracker"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Environment :: Win32 (MS Windows)",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "requests",
    "beautifulsoup4",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
primetracker = "primetracker.app:main"

[tool.hatch.build.targets.wheel]
packages = ["primetracker"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
