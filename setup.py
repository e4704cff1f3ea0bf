#!/usr/bin/env python3
"""
pointtrack Setup Script
=======================
Low-pass, Kalman and Unscented Kalman filters for 2-D point tracking.

License: AGPL-3.0-or-later
"""

import re
from pathlib import Path
from setuptools import setup, find_packages

HERE = Path(__file__).parent


# Read version from __init__.py
def get_version():
    init_path = HERE / "python" / "pointtrack" / "__init__.py"
    if init_path.exists():
        content = init_path.read_text()
        match = re.search(r'__version__\s*=\s*["\']([^"\']+)["\']', content)
        if match:
            return match.group(1)
    return "1.0.0"


# Read README for long description
def get_long_description():
    readme_path = HERE / "README.md"
    if readme_path.exists():
        return readme_path.read_text(encoding="utf-8")
    return "pointtrack: 2-D point tracking with low-pass, Kalman and UKF estimators"


# Core dependencies
INSTALL_REQUIRES = [
    "numpy>=1.20.0",
]

# Optional dependencies
EXTRAS_REQUIRE = {
    "dev": [
        "pytest>=7.0.0",
        "pytest-cov>=4.0.0",
        "scipy>=1.7.0",
        "ruff>=0.1.0",
        "mypy>=1.0.0",
        "black>=23.0.0",
    ],
}
EXTRAS_REQUIRE["test"] = ["pytest>=7.0.0", "scipy>=1.7.0"]

setup(
    name="pointtrack",
    version=get_version(),
    description="Noisy 2-D position tracking with low-pass, linear Kalman and UKF filters",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    license="AGPL-3.0-or-later",

    packages=find_packages(where="python"),
    package_dir={"": "python"},

    python_requires=">=3.9",
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,

    entry_points={
        "console_scripts": [
            "pointtrack-demo=pointtrack.cli:main",
        ],
    },

    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering",
        "License :: OSI Approved :: GNU Affero General Public License v3 or later (AGPLv3+)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    keywords=[
        "kalman-filter",
        "ukf",
        "low-pass",
        "tracking",
        "coordinated-turn",
    ],
    zip_safe=False,
)
