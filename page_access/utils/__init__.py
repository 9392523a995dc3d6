"""
Utilities package for common helper functions.
"""
from .response_utils import get_cors_headers, build_response
from .time_utils import now_iso
from .json_utils import json_clean

__all__ = [
    'get_cors_headers',
    'build_response',
    'now_iso',
    'json_clean'
]
