"""
Storage backends

The active backend is chosen by settings.STORAGE_BACKEND (dotted path) and
shared by every request of the process.
"""

from django.conf import settings
from django.utils.module_loading import import_string

from .base import BaseStorage

_instances = {}


def get_storage():
    """Return the configured storage backend instance"""
    path = settings.STORAGE_BACKEND
    if path not in _instances:
        _instances[path] = import_string(path)()
    return _instances[path]


__all__ = ['BaseStorage', 'get_storage']
