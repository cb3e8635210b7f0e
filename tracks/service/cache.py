"""
Main cache pipeline entrypoint.

Provides a single function that makes sure a decoded PCM copy of a remote
track exists in the cache, used by both the CLI and the web app.

    CHECK_EXISTS -> HIT
                 -> MISS: FETCH -> DECODE -> PERSIST

The existence of the target file is the HIT/MISS signal, so a target is only
ever published complete: PCM goes to a .part file in the same directory and
is renamed into place.
"""

import os
from pathlib import Path

from nanoid import generate

from tracks.service.constants import PARTIAL_EXTENSION
from tracks.service.decode import decode_to_pcm
from tracks.service.errors import PathError, PersistFailed
from tracks.service.fetch import fetch_audio
from tracks.service.flight import KeyedLocks
from tracks.service.paths import container_path_for, resolve

_in_flight = KeyedLocks()


def _remove_quietly(path, log):
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        log(f'Could not remove {path}: {e}')


def write_pcm_atomic(target_path, pcm_data):
    """
    Publish PCM bytes at target_path in one rename.

    Raises:
        PersistFailed: If the write or rename fails; no partial file is left
    """
    target_path = Path(target_path)
    partial_path = target_path.with_name(f'.{generate(size=10)}{PARTIAL_EXTENSION}')
    try:
        with open(partial_path, 'wb') as f:
            f.write(pcm_data)
        os.replace(partial_path, target_path)
    except OSError as e:
        try:
            partial_path.unlink()
        except OSError:
            pass
        raise PersistFailed(f'write failed: {target_path}: {e}') from e


def ensure_cached(collection_name, item_name, remote_identifier, cache_root=None, logger=None):
    """
    Ensure a decoded PCM copy of a remote track exists in the cache.

    Args:
        collection_name: Collection name (e.g. channel title)
        item_name: Item name (e.g. video title)
        remote_identifier: URL or ID passed to the downloader on a miss
        cache_root: Cache root directory (default from settings)
        logger: Optional callable(str) for logging

    Returns:
        Path: Absolute path of the cache entry

    Raises:
        PathError: If the entry's directory cannot be created
        FetchFailed: If the download fails
        DecodeFailed: If the decode fails
        PersistFailed: If the PCM cannot be written
    """
    def log(message):
        if logger:
            logger(message)

    target_path = resolve(collection_name, item_name, root=cache_root).absolute()

    if target_path.exists():
        log(f'Cache hit: {target_path}')
        return target_path

    with _in_flight.hold(str(target_path)):
        # Another request may have filled it while we waited
        if target_path.exists():
            log(f'Cache hit after wait: {target_path}')
            return target_path

        log(f'Cache miss, fetching: {target_path}')

        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PathError(f'could not create {target_path.parent}: {e}') from e

        container_path = container_path_for(target_path)
        try:
            fetch_audio(remote_identifier, container_path, logger=logger)
            pcm_data = decode_to_pcm(container_path, logger=logger)
        finally:
            _remove_quietly(container_path, log)

        write_pcm_atomic(target_path, pcm_data)

    log(f'Cached {len(pcm_data)} bytes: {target_path}')
    return target_path
