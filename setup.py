"""setuptools setup for Timekeeper.

Install for development:
    pip install -e ".[test]"
    pytest
"""

from setuptools import setup, find_packages

setup(
    name="timekeeper",
    version="0.1.0",
    description="Timer vocabulary, state machine and duration accounting",
    packages=find_packages(include=["timekeeper", "timekeeper.*"]),
    python_requires=">=3.10",
    install_requires=["PyQt6"],
    extras_require={"test": ["pytest"]},
)
