# -*- coding: utf-8 -*-
"""Quotient-space engine for exploring the real projective plane."""

from importlib.metadata import PackageNotFoundError, version


try:
    __version__ = version("seamviz")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"
