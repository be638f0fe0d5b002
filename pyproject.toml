[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kafkawire"
version = "0.1.0"
description = "Kafka wire-protocol primitives: binary codecs, gzip and snappy compression, consumer assignments and producer partitioning"
requires-python = ">=3.10"
dependencies = []
keywords = ["kafka", "protocol", "codec", "partitioner", "snappy", "gzip", "xxhash"]
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
    "Topic :: System :: Distributed Computing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["kafkawire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
