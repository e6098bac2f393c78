[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "discordrest"
version = "0.1.0"
description = "A client for the Discord REST API with per-route rate limiting, webhooks and request payload validation."
requires-python = ">=3.10"
dependencies = [
    "httpx",
]
keywords = ["discord", "rest", "api", "bot", "webhook", "rate-limit", "chat"]
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
    "Topic :: Communications :: Chat",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["discordrest"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
