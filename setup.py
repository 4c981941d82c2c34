#!/usr/bin/env python3

from setuptools import find_packages, setup

version = {}
with open("./version_compat/_version.py") as f:
    exec(f.read(), version)

with open("./README.md") as f:
    long_description = f.read()

setup(
    name="version-compat",
    version=version["__version__"],
    license="Apache-2.0",
    description="Recommend versions from a semantic version compatibility matrix",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["test", "test.*"]),
    platforms="any",
    python_requires=">=3.9",
    install_requires=[
        "semver>=3.0.0",
        "toml>=0.10.0",
        "icontract>=2.6.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-cov",
            "pretend",
            "hypothesis>=6.0.0",
        ],
        "dev": [
            "flake8",
            "black",
            "isort",
            "pytest",
            "pytest-cov",
            "pretend",
            "hypothesis>=6.0.0",
            "coverage[toml]",
            "interrogate",
            "mypy",
            "types-toml",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
    ],
)
