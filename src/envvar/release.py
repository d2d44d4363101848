# Copyright (c) 2024 Envvar Contributors
# MIT License

"""Envvar release metadata."""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Envvar Contributors"
