from setuptools import setup, find_packages

setup(
    name="relnet",
    version="0.4.0",
    description="relnet - Relationship network graph reconciliation and path finding",
    packages=find_packages(include=["relnet", "relnet.*"]),
    include_package_data=True,
    install_requires=[
        # Core data modeling and validation
        "pydantic>=2.0.0",

        # Environment variables
        "python-dotenv>=1.0.0",

        # Graph analysis (path finding)
        "networkx>=3.0",

        # CLI and rich output
        "typer>=0.9.0",
        "rich>=13.0.0",

        # YAML support for network snapshots
        "pyyaml>=6.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "relnet = relnet.app.cli:main",
        ],
    },
    python_requires=">=3.11",
    package_dir={"": "."},
)
