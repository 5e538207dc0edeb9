[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lightgateway"
version = "0.1.0"
description = "LoRaWAN frame codec, subnet addressing and proof-of-coverage beacon construction for a light gateway"
requires-python = ">=3.10"
dependencies = []
keywords = ["lorawan", "lora", "gateway", "beacon", "devaddr", "netid"]
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
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lightgateway"]

[tool.pytest.ini_options]
addopts = "-ra"
