#!/usr/bin/env python3
"""
Setup script for the frameforge ping client
"""

from setuptools import setup, find_packages

setup(
    name="frameforge-ping",
    version="0.0.1",
    description="One-shot ping client for the frameforge Unix domain socket",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click==8.1.7",
        "typer==0.12.3",
        "rich==13.9.2",
    ],
    extras_require={
        "test": [
            "pytest==8.4.2",
            "pytest-asyncio==1.2.0",
        ],
    },
    python_requires=">=3.10",
    entry_points={
        'console_scripts': [
            'frameforge-ping=client.ping_cli:main',
            'frameforge-pong=server.pong_server:main',
        ],
    },
)
