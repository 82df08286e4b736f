# setup.py
from setuptools import setup, find_packages

setup(
    name="interpolation_contract",
    version="0.1.0",
    description="Conformance checks for interpolation implementations",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": [
            "pytest",
            "sympy",
        ],
    },
)
