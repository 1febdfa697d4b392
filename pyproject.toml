[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vertexutils"
version = "0.1.0"
description = "Transaction types, EIP-712 digests, trigger order status and subaccount lookups for an order-book exchange engine"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = ["eip712", "keccak", "trigger-orders", "subaccount", "trading"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["vertexutils"]

[tool.pytest.ini_options]
addopts = "-ra"
