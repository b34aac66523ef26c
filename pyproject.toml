[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "k8up"
version = "2.0.0"
description = "Data model and helpers for backup, restore, archive, check and prune jobs of a Kubernetes backup operator"
requires-python = ">=3.10"
dependencies = []
keywords = ["backup", "restore", "kubernetes", "restic", "schedule", "tar", "gzip"]
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
    "Topic :: System :: Archiving :: Backup",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["k8up"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
