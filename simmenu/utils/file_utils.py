"""
File utilities for SimMenu
"""
import plistlib
from xml.parsers.expat import ExpatError
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

logger = logging.getLogger(__name__)


def list_subdirectories(root: Union[str, Path]) -> List[Path]:
    """
    List the immediate subdirectories of a directory

    Entries whose metadata cannot be read are skipped.

    Args:
        root: Directory to list

    Returns:
        Sorted list of subdirectory paths

    Raises:
        OSError: If the directory itself cannot be listed
    """
    root = Path(root)
    directories = []

    for entry in root.iterdir():
        try:
            if entry.is_dir():
                directories.append(entry)
        except OSError as e:
            logger.debug(f"Skipping unreadable entry {entry}: {e}")

    return sorted(directories)


def list_entries(directory: Union[str, Path], include_hidden: bool = False) -> List[Path]:
    """
    List the immediate children of a directory

    Args:
        directory: Directory to list
        include_hidden: Include dot-files

    Returns:
        Sorted list of child paths

    Raises:
        OSError: If the directory cannot be listed
    """
    children = [
        entry for entry in Path(directory).iterdir()
        if include_hidden or not entry.name.startswith('.')
    ]
    return sorted(children)


def read_plist(path: Union[str, Path]) -> Optional[Dict[str, Any]]:
    """
    Read a property list file

    Returns:
        Top-level dictionary, or None if the file is missing or malformed
    """
    path = Path(path)
    try:
        with open(path, 'rb') as f:
            data = plistlib.load(f)
    except FileNotFoundError:
        return None
    except (OSError, plistlib.InvalidFileException, ExpatError, ValueError) as e:
        logger.warning(f"Could not read plist {path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Ignoring plist without a top-level dictionary: {path}")
        return None

    return data
