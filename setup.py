"""Packaging for the eqlab library and its export command."""
from __future__ import annotations

from setuptools import find_packages, setup

setup(
    name="eqlab",
    version="0.1.0",
    description="Parametric EQ response modelling, auto-gain and preset export",
    packages=find_packages(exclude=("tests",)),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "matplotlib",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={"console_scripts": ["eqlab=eqlab.cli:main"]},
)
