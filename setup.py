#!/usr/bin/env python
"""
Setup script for ccloop

This file exists for backward compatibility with older pip versions
and build tools that don't fully support pyproject.toml yet.

All actual configuration is in pyproject.toml.
"""

from setuptools import setup

if __name__ == "__main__":
    setup()
