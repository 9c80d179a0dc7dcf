[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "static3d"
version = "0.1.0"
description = "Asset collection, content hashing, deploy manifests and iframe-partitioned HTML pages for static 3D sites"
requires-python = ">=3.10"
dependencies = []
keywords = ["static-site", "cdn", "manifest", "assets", "gltf", "iframe", "deploy"]
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
    "Topic :: Internet :: WWW/HTTP :: Site Management",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["static3d"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
