"""
Cache path resolution.

Maps a (collection, item) pair, e.g. (channel title, video title), to a
deterministic, filesystem-safe location inside the PCM cache.
"""

import re
from pathlib import Path

from tracks.service.config import get_cache_dir
from tracks.service.constants import (
    CONTAINER_EXTENSION,
    FORBIDDEN_FILENAME_CHARS,
    PCM_EXTENSION,
)

_FORBIDDEN_RE = re.compile('[' + re.escape(FORBIDDEN_FILENAME_CHARS) + ']')
_WHITESPACE_RE = re.compile(r'\s+')

# Names that cannot be used as a directory or file stem
_RESERVED_COMPONENTS = ('', '.', '..')


def sanitize_filename(name):
    """
    Make a string safe to use as a single path component.

    Each of \\ / : * ? " < > | becomes a space, whitespace runs collapse to a
    single space and the ends are trimmed. Applying it twice gives the same
    result as applying it once.

    Note that distinct inputs can map to the same output
    ("a/b" and "a:b" both give "a b").

    Args:
        name: Raw collection or item name

    Returns:
        str: Sanitized name
    """
    sanitized = _FORBIDDEN_RE.sub(' ', name)
    return _WHITESPACE_RE.sub(' ', sanitized).strip()


def resolve(collection_name, item_name, root=None):
    """
    Resolve the cache path for a (collection, item) pair.

    A name that sanitizes to nothing (or to . or ..) is stored as 'untitled'
    so that every entry stays two levels below the root.

    Args:
        collection_name: Collection name (e.g. channel title)
        item_name: Item name (e.g. video title)
        root: Cache root directory (default from settings)

    Returns:
        Path: <root>/<collection>/<item>.pcm
    """
    if root is None:
        root = get_cache_dir()
    collection = _path_component(collection_name)
    item = _path_component(item_name)
    return Path(root) / collection / f'{item}{PCM_EXTENSION}'


def container_path_for(target_path):
    """Transient container path that sits next to a cache entry"""
    return Path(target_path).with_suffix(CONTAINER_EXTENSION)


def _path_component(name):
    sanitized = sanitize_filename(name)
    if sanitized in _RESERVED_COMPONENTS:
        return 'untitled'
    return sanitized
