[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "casper-sdk"
version = "0.1.0"
description = "Client library for Casper network nodes: JSON-RPC queries, deploy submission and server-sent event streams"
requires-python = ">=3.10"
dependencies = []
keywords = ["casper", "blockchain", "json-rpc", "sse", "server-sent-events", "cspr"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["casper_sdk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
