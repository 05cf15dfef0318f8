[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "upspring"
version = "0.1.0"
description = "Model editor core: config files, keyframe animation, track views and command-line parsing"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "3d",
    "model-editor",
    "animation",
    "keyframes",
    "config",
    "spring-rts",
]
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
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["upspring"]

[tool.hatch.build.targets.sdist]
include = [
    "upspring",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
