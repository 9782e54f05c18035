[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ferrousci"
version = "0.1.0"
description = "Domain core of a CI/CD system: errors, identifiers, build status, pipeline configuration and domain events"
requires-python = ">=3.10"
dependencies = []
keywords = ["ci", "cd", "continuous-integration", "continuous-delivery", "devops", "pipeline"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["ferrousci"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
