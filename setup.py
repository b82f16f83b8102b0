from __future__ import annotations

from setuptools import find_packages, setup  # type: ignore


setup(
    name="waterrights",
    version="0.1.0",
    description="In-memory, access-controlled water rights registry with an HTTP API",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "fastapi",
        "uvicorn",
        "httpx",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "waterrights=waterrights.__main__:main",
        ],
    },
)
