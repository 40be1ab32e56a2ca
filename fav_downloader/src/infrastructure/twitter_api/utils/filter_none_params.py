"""Helpers for query parameters"""

from typing import Any


def filter_none_params(kwargs: dict[str, Any | None]) -> dict[str, Any]:
    """Drop parameters without value and stringify the rest for the query"""
    return {key: str(value) for key, value in kwargs.items() if value is not None}
