"""
Download service for compressed audio.

Runs yt-dlp as an external process to materialize an Opus container for a
remote identifier (watch URL or anything else yt-dlp accepts).
"""

import shutil
import subprocess
import sys
from pathlib import Path

from tracks.service.config import get_ytdlp_command_setting, get_ytdlp_extra_args
from tracks.service.constants import CONTAINER_FORMAT
from tracks.service.errors import FetchFailed


def get_ytdlp_command():
    """
    Resolve the downloader command prefix.

    Order: TUBEPCM_YTDLP_COMMAND setting, yt-dlp on PATH, then the yt_dlp
    module of the running interpreter.

    Returns:
        list: Command prefix
    """
    configured = get_ytdlp_command_setting()
    if configured:
        return configured
    if shutil.which('yt-dlp'):
        return ['yt-dlp']
    return [sys.executable, '-m', 'yt_dlp']


def build_fetch_command(remote_identifier, destination):
    """
    Build the yt-dlp command line for an audio-only fetch.

    Args:
        remote_identifier: URL or ID understood by yt-dlp
        destination: Output container path

    Returns:
        list: Full argument vector
    """
    return get_ytdlp_command() + [
        '-x',  # Extract audio only
        '--audio-format', CONTAINER_FORMAT,
        '--audio-quality', '0',  # Best
        '--no-playlist',
        '--no-part',
        '--no-mtime',
    ] + get_ytdlp_extra_args() + [
        '-o', str(destination),
        remote_identifier,
    ]


def fetch_audio(remote_identifier, destination, logger=None):
    """
    Download the audio of a remote identifier to a container file.

    Args:
        remote_identifier: URL or ID understood by yt-dlp
        destination: Output container path (Path object or str)
        logger: Optional callable(str) for logging

    Returns:
        Path: The container path

    Raises:
        FetchFailed: If yt-dlp cannot start, exits nonzero or leaves no file.
            The combined stdout/stderr is available as ``output``.
    """
    def log(message):
        if logger:
            logger(message)

    destination = Path(destination)
    cmd = build_fetch_command(remote_identifier, destination)

    log(f'Downloading with yt-dlp: {remote_identifier}')
    log(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors='replace',
        )
    except OSError as e:
        raise FetchFailed(f'download failed: could not run {cmd[0]}: {e}') from e

    if result.returncode != 0:
        log(f'yt-dlp output: {result.stdout}')
        raise FetchFailed(
            f'download failed: yt-dlp exited with code {result.returncode}, output: {result.stdout}',
            output=result.stdout,
        )

    if not destination.exists():
        raise FetchFailed(
            f'download failed: no file at {destination}, output: {result.stdout}',
            output=result.stdout,
        )

    log(f'Downloaded {destination.stat().st_size} bytes to {destination}')
    return destination
