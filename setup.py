#!/usr/bin/env python

# Usage:
#  $ pip install .
#  $ pip install -e .[test]

from setuptools import setup, find_packages


# util function to get version information from file with __version__=
def get_version(filename):
    try:
        with open(filename, "r") as f:
            for line in f:
                if line.startswith("__version__"):
                    # extract the version string and strip it
                    version = line.split('"')[1].strip().strip('"').strip("'")
                    return version
    except FileNotFoundError:
        print(f"Cannot get version information from {filename}")


setup(
    name="geoscaling",
    version=get_version("./src/geoscaling/_version.py"),
    description="Non-dimensionalisation of geodynamic models and material parameters",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pint",
        "sympy",
        "scipy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
