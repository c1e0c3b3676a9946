[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ht32panel"
version = "0.8.0"
description = "Drive the LCD panel and LED strip of HT32-based mini PCs and sample the system metrics they display"
requires-python = ">=3.10"
keywords = ["lcd", "led", "hid", "hidraw", "serial", "mini-pc", "sensors", "rgb565"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
    "Topic :: System :: Monitoring",
    "Typing :: Typed",
]
dependencies = [
    "pyserial",
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["ht32panel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
