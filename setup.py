"""Installation script."""
from os import path

from setuptools import find_packages, setup

HERE = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(HERE, "README.rst"), encoding="utf-8") as f:
    LONG_DESCRIPTION = f.read()

setup(
    name="msets",
    version="0.1a",
    description="Multisets with a configurable equivalence relation",
    long_description=LONG_DESCRIPTION,
    license="MIT",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
    packages=find_packages(exclude=["docs", "tests"]),
    python_requires=">=3.7",
    install_requires=["ovld"],
    extras_require={
        "test": ["flake8", "pytest", "pytest-cov", "pydocstyle"],
    },
)
