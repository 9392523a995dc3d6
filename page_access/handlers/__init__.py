"""
Handlers package for request routing.
"""
from .permission_handler import (
    handle_options_request,
    handle_get_request,
    handle_delete_request,
    extract_caller_identity
)

__all__ = [
    'handle_options_request',
    'handle_get_request',
    'handle_delete_request',
    'extract_caller_identity'
]
