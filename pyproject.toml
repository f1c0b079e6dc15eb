[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "radixroute"
version = "1.4.0.dev0"
description = "Radix-tree URL routing with path parameters, catch-alls and trailing-slash hints"
requires-python = ">=3.10"
dependencies = []
keywords = ["router", "radix", "tree", "http", "url", "routing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["radixroute"]

[tool.pytest.ini_options]
addopts = "-ra"
