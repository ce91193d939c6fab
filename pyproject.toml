[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lwsnmp"
version = "0.1.0"
description = "A lightweight SNMP agent core: BER codec, OID helpers, MIB tree resolution and MIB-II groups"
requires-python = ">=3.10"
dependencies = []
keywords = ["snmp", "asn1", "ber", "mib", "mib-2", "oid", "agent"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lwsnmp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
