"""
setup.py for the build pipeline

Runtime Requirements:
- .NET SDK (dotnet) on PATH for restore, test and publish
- MSBuild with the Windows App SDK workloads for the UWP package (Windows 10 or later)
- A version-stamping tool, configured in build_pipeline/config/pipeline.yaml
"""

from pathlib import Path
from setuptools import setup, find_packages

# Read README for long description
readme_path = Path("README.md")
long_description = ""
if readme_path.exists():
    with open(readme_path, "r", encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="build-pipeline",
    version="1.0.0",
    description="Clean, restore, version, test and publish pipeline for the UWP and CLI apps",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["build_pipeline", "build_pipeline.*"]),
    package_data={
        "build_pipeline": [
            "config/*.yaml",
        ]
    },
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "build-pipeline=build_pipeline.main:main",
        ],
    },
    zip_safe=False,
    python_requires=">=3.10",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: MacOS",
        "Topic :: Software Development :: Build Tools",
    ],
)
