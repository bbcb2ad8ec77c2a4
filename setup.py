# setup.py

from setuptools import setup, find_packages
from pathlib import Path

readme = Path(__file__).parent / "README.md"
long_description = readme.read_text() if readme.exists() else ""

setup(
    name="fraudcheck-gateway",
    version="1.0.0",
    description="Fraud scoring gateway: feature enrichment, model serving call, ground-truth validation",
    long_description=long_description,
    long_description_content_type="text/markdown",

    packages=find_packages(include=["fraudcheck", "fraudcheck.*", "fraudcheck_features", "fraudcheck_features.*"]),

    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
        "pydantic>=2.0.0",
        "redis>=5.0.1",
        "httpx>=0.27.0",
        "pandas>=2.0.0",
    ],

    extras_require={
        "test": ["pytest", "anyio"],
        "dev": ["pytest", "anyio", "black", "mypy"]
    },

    entry_points={
        "console_scripts": [
            "fraudcheck-gateway=fraudcheck.main:main",
            "fraudcheck-seed=fraudcheck.jobs.seed_store:main",
        ]
    },

    python_requires=">=3.9",

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ]
)
