##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

import os

from setuptools import find_packages, setup


version = __import__("mongostore").VERSION

HERE = os.path.dirname(os.path.abspath(__file__))


def readme():
    with open(os.path.join(HERE, "README.md")) as f:
        return f.read()


def read_requirements(filename: str):
    """Return the requirements listed in `requirements/<filename>`, without comments."""
    with open(os.path.join(HERE, "requirements", filename)) as f:
        lines = (line.split("#", 1)[0].strip() for line in f)
        return [line for line in lines if line]


setup(
    name="mongostore",
    author="Mongostore Dev team",
    version=version,
    description="Model registry and transaction coordinator for MongoDB.",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    keywords="mongodb models transactions",
    license="MIT",
    python_requires=">=3.9",
    packages=find_packages(exclude=["tests.*", "tests"]),
    install_requires=read_requirements("release.txt"),
    extras_require={"dev": read_requirements("dev.txt")},
    entry_points={
        "console_scripts": [
            "mongostore=mongostore.main:main",
        ]
    },
    include_package_data=True,
    zip_safe=False,
)
