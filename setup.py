from setuptools import setup
from modlog import __version__

setup(
    name="modlog",
    long_description="modlog is a module logger facade with a swappable backend, module filtering and a small token based service registry.",
    version=__version__,
    packages=[
        "modlog",
        "modlog.logging",
    ],
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "click>=8.0.3,<9.0.0",
        "pyyaml>=6.0.0,<7.0.0",
        "pyserde>=0.12.0",
        "humanfriendly>=10.0.0,<11.0.0",
        "beartype>=0.17.0,<1.0.0",
    ],
    extras_require={
        "tests": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
        ],
    },
    entry_points="""
        [console_scripts]
        modlog=modlog.cli:cli
    """,
)
