"""
Setup script for the msethash package.
"""

from setuptools import setup, find_packages

with open("requirements-dev.txt", "r") as f:
    dev_requirements = [
        line.strip() for line in f if line.strip() and not line.startswith("#")
    ]

setup(
    name="msethash",
    version="0.1.0",
    description="Incremental homomorphic multiset hashing (MSet-Mu-Hash)",
    author="msethash contributors",
    packages=find_packages(include=["msethash", "msethash.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pycryptodome>=3.19",
        "blake3>=0.4",
        "py_ecc>=6.0",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "python-dotenv>=1.0",
        "python-json-logger>=3.1",
    ],
    extras_require={
        "dev": dev_requirements,
        "test": dev_requirements,
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Security :: Cryptography",
    ],
)
