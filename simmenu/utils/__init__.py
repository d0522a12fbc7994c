# simmenu/utils/__init__.py

"""
SimMenu Utilities
"""
from .config import Config, load_config
from .logger import setup_logging
from .file_utils import list_subdirectories, list_entries, read_plist

__all__ = [
    'Config', 'load_config',
    'setup_logging',
    'list_subdirectories', 'list_entries', 'read_plist',
]
