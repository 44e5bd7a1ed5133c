#!/usr/bin/env python
from setuptools import find_packages, setup

setup(
    name="dots-wallpaper",
    version="0.1.0",
    description="Compose one wallpaper out of angled strips of source images.",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.9",
    install_requires=[
        "Pillow>=9.2",
        "numpy",
        "attrs>=22.2.0",
    ],
    extras_require={
        "tests": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "dots-wallpaper=dots_wallpaper.__main__:main",
        ],
    },
)
