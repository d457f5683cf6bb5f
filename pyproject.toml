[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "invoicegen"
version = "0.1.0"
description = "Keep contractors, products and invoices in plain text files and render invoices into HTML from a template"
requires-python = ">=3.10"
dependencies = []
keywords = ["invoice", "invoicing", "accounting", "contractors", "products", "vat"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: English",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Accounting",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
invoicegen = "invoicegen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["invoicegen"]

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
warn_redundant_casts = true
