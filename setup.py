#!/usr/bin/env python

import setuptools


def parse_requirements(path):
    with open(path, "r") as req_file:
        return [
            line.strip()
            for line in req_file
            if line.strip() and not line.startswith("#")
        ]


requirements = parse_requirements("requirements.txt")


setuptools.setup(
    name="playq",
    version="1.0",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    license="BSD 3-Clause License",
    description="Interactive command line audio player with a playback queue",
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={"test": ["pytest"]},
    scripts=[
        "bin/playq",
    ],
)
