# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

from pathlib import Path

from setuptools import find_namespace_packages, setup

pkg_dir = Path(__file__).parent.absolute()


def read_requirements_from_file():
    with open(pkg_dir / "requirements.txt") as fh:
        requirements = []
        for line in fh:
            line = line.strip()
            if "#" in line:
                line = line[: line.index("#")].strip()
            if len(line) == 0:
                continue
            requirements.append(line)
        return requirements


def read_long_description_from_readme():
    with open(pkg_dir / "README.md", "r", encoding="utf-8") as fh:
        return fh.read()


setup(
    name="tsrecursive",
    version="0.1.0",
    # subpackages have no __init__.py
    packages=find_namespace_packages(include=["tsrecursive", "tsrecursive.*"]),
    description="Recursive multi-step forecasting with any one-step-ahead regressor",
    long_description=read_long_description_from_readme(),
    long_description_content_type="text/markdown",
    author="Contributors to the tsrecursive project",
    license="MPL-2.0",
    keywords=["timeseries", "forecasting", "machinelearning"],
    python_requires=">=3.11.0",
    install_requires=read_requirements_from_file(),
    setup_requires=["wheel"],
    extras_require={
        "tests": ["pytest", "pytest-cov", "flake8"],
    },
    classifiers=[
        r"Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        r"License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)",
        "Programming Language :: Python :: 3.11",
    ],
)
