from setuptools import find_namespace_packages, setup

setup(
    name="vantage",
    version="0.1.0",
    description="Bundle-size and runtime performance budget enforcement for Next.js builds",
    python_requires=">=3.11",
    packages=find_namespace_packages(include=["vantage", "vantage.*"]),
    install_requires=[
        "result>=0.17",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": ["vantage=vantage.cli:main"],
    },
)
