[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tgspec"
version = "0.1.0"
description = "Doc-comment tag parsing, naming helpers, Go module lookup and OpenAPI 3 document building for transport code generation"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "openapi",
    "swagger",
    "json-rpc",
    "code-generation",
    "go-modules",
    "doc-tags",
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
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tgspec"]

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
