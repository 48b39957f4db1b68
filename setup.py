import os
from setuptools import setup


src_version = os.path.join(os.path.dirname(__file__), "aocdir", "version.py")
with open(src_version) as f:
    version = f.read().strip().split()[-1][1:-1]


setup(
    name="advent-of-code-dir",
    version=version,
    description="Scaffold, fetch and submit Advent of Code puzzles by directory",
    long_description=open("README.rst").read(),
    long_description_content_type="text/x-rst",
    packages=["aocdir"],
    package_data={"aocdir": ["templates/*.tmpl"]},
    entry_points={
        "console_scripts": [
            "aocdir=aocdir.cli:main",
        ],
    },
    license="MIT",
    classifiers=[
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Topic :: Software Development :: Libraries",
        "Topic :: Games/Entertainment :: Puzzle Games",
    ],
    python_requires=">=3.10",
    install_requires=[
        "beautifulsoup4",
        "pebble",
        "urllib3",
        'tzdata; platform_system == "Windows"',
    ],
    extras_require={
        "test": [
            "pook",
            "pytest",
            "pytest-freezer",
            "pytest-mock",
            "pytest-raisin",
        ],
    },
)
