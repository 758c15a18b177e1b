[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parapet"
version = "0.1.0"
description = "Headless core for a desktop status bar: TOML configuration, widget data providers and an interval poller"
requires-python = ">=3.11"
keywords = ["status-bar", "panel", "widgets", "desktop", "sysinfo", "configuration"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers :: Applets",
    "Topic :: System :: Monitoring",
]
dependencies = [
    "tomli-w",
    "psutil",
    "watchdog",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["parapet"]

[tool.pytest.ini_options]
addopts = "-ra"
