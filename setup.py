"""Setup script for gogo-meta."""

from pathlib import Path

from setuptools import find_packages, setup

README = Path(__file__).parent / "README.md"

setup(
    name="gogo-meta",
    version="0.3.0",
    description="Run git, npm and shell commands across the repositories of a meta repository",
    long_description=README.read_text(encoding="utf-8") if README.exists() else "",
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    packages=find_packages(include=["gogo", "gogo.*"]),
    install_requires=[
        "click>=8.1",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "dependency-injector>=4.41",
        'tomli>=2.0; python_version < "3.11"',
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "gogo=gogo.__main__:main",
        ],
    },
)
