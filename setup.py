#!/usr/bin/env python
"""
Setup script for vsa-calculator package.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

# Read requirements
requirements = []
requirements_file = this_directory / "requirements.txt"
if requirements_file.exists():
    requirements = [r for r in requirements_file.read_text().splitlines() if r.strip()]

setup(
    name="vsa-calculator",
    version="1.0.0",
    description="Average shear-wave velocity (Vsa) of layered soil profiles by simplified and exact methods",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    license="GPL-3.0-only",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Physics",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "vsa-calculator=vsa_calculator.cli.main:cli",
        ],
    },
    include_package_data=True,
    package_data={
        "vsa_calculator": [
            "data/*.yaml",
        ],
    },
    keywords="geotechnical seismology shear-wave-velocity vs30 site-period transfer-matrix",
)
