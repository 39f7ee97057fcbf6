from setuptools import find_namespace_packages, setup

setup(
    name="reclaim",
    version="0.1.0",
    description="Report, estimate and reclaim disk space on Windows volumes.",
    packages=find_namespace_packages(include=["reclaim", "reclaim.*"]),
    python_requires=">=3.10",
    install_requires=[
        "typer>=0.9",
        "rich>=13.0",
        "result>=0.16",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "reclaim=reclaim.cli.app:cli",
        ],
    },
)
