[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blahajdissect"
version = "1.0.0"
description = "Dissectors for application-layer network protocols with three levels of detail"
requires-python = ">=3.10"
dependencies = []
keywords = ["network", "packet", "dissector", "dns", "dhcp", "mqtt", "tls", "wireguard"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
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
packages = ["blahajdissect"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
