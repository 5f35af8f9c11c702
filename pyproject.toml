[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shibabot"
version = "0.1.0"
description = "Chat bot building blocks: reminders, polls, activity rotation, command counting, MySQL and MongoDB storage, logging and embed building."
requires-python = ">=3.10"
keywords = ["chat", "bot", "reminders", "polls", "webhooks", "embeds", "mysql", "mongodb"]
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
    "Topic :: Communications :: Chat",
]
dependencies = [
    "httpx",
    "pymysql",
    "pymongo",
    "psutil",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shibabot"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
