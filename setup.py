#!/usr/bin/env python3
"""
Setup script for Gesture Constellation
"""

from pathlib import Path

from setuptools import setup, find_packages


def read_requirements(path=Path(__file__).parent / "requirements.txt"):
    """Read runtime requirements, skipping comments"""
    with open(path, "r") as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


setup(
    name="gesture-constellation",
    version="0.1.0",
    description="Two-hand gesture recognition driving a particle constellation effect",
    packages=find_packages(include=["constellation", "constellation.*"]),
    package_data={"constellation": ["config.default.yaml"]},
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "camera": ["mediapipe>=0.10,<0.10.30"],
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "constellation=constellation.main:run",
        ],
    },
)
