[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aztfresolve"
version = "0.1.0"
description = "Resolve Azure resource IDs to a single Terraform azurerm resource type by reading the resource from the Azure Resource Manager API"
requires-python = ">=3.10"
dependencies = []
keywords = ["azure", "terraform", "azurerm", "arm", "resource-id"]
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
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["aztfresolve"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
