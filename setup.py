import re

from setuptools import find_packages, setup

with open("pliscan/_version.py") as f:
    version = re.search(r'__version__ = "(.+)"', f.read()).group(1)

setup(
    name="pliscan",
    version=version,
    description="Detects non-covalent interactions between a receptor and ligands",
    packages=find_packages(include=["pliscan", "pliscan.*"]),
    python_requires=">=3.10",
    install_requires=[
        "rdkit>=2022.09",
        "numpy>=1.21",
        "pandas>=1.1",
        "tqdm",
        "multiprocess",
    ],
    extras_require={
        "tests": ["pytest>=6.1.2"],
    },
    entry_points={
        "console_scripts": ["pliscan=pliscan.command_line:main"],
    },
)
