# setup.py
from setuptools import setup, find_packages

setup(
    name="tablerecord",
    version="0.1.0",
    description="Schema-aware single-record mapper for MariaDB/MySQL and SQLite",
    packages=find_packages(
        include=("tablerecord", "tablerecord.*"),
        exclude=(
            "tests",
            "docs",
            "dist",
            "build",
        ),
    ),
    install_requires=[
        "pymysql>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    python_requires=">=3.10",
)
