[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mediaextract"
version = "0.1.0"
description = "Media extraction helpers for social and streaming sites, with a request signer for the TikTok mobile API"
requires-python = ">=3.10"
keywords = [
    "media",
    "extractor",
    "download",
    "tiktok",
    "instagram",
    "youtube",
    "soundcloud",
    "signature",
]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Multimedia",
]
dependencies = [
    "cryptography",
    "beautifulsoup4",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mediaextract"]

[tool.hatch.build.targets.sdist]
include = [
    "mediaextract",
    "tests",
]

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
