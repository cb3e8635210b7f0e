"""
Decode service.

Converts a compressed audio container into raw PCM (48 kHz, stereo, s16le,
no header) by piping it through an ffmpeg process.

ffmpeg writes PCM to stdout and diagnostics to stderr. Both are pipes with a
bounded OS buffer, so stderr is drained on its own thread for the whole life
of the process while the caller reads stdout. Without that, a chatty decoder
fills the stderr pipe, blocks, and the stdout read never finishes.
"""

import os
import shutil
import subprocess
import threading
from collections import deque
from pathlib import Path

from tracks.service.config import get_ffmpeg_path_setting
from tracks.service.constants import (
    PCM_CHANNEL_LAYOUT,
    PCM_CHANNELS,
    PCM_CODEC,
    PCM_FORMAT,
    PCM_SAMPLE_RATE,
)
from tracks.service.errors import DecodeFailed

WINDOWS_FFMPEG_PATH = r'C:\ffmpeg\bin\ffmpeg.exe'

# How much of stderr is kept for error messages
STDERR_TAIL_BYTES = 4096

_READ_CHUNK = 65536


def get_ffmpeg_path():
    """
    Resolve the ffmpeg executable.

    TUBEPCM_FFMPEG_PATH wins when set. On Windows ffmpeg is looked up on PATH
    first and falls back to the usual manual install location; elsewhere the
    plain name is left to the OS lookup.
    """
    configured = get_ffmpeg_path_setting()
    if configured:
        return configured
    if os.name == 'nt':
        if shutil.which('ffmpeg'):
            return 'ffmpeg'
        return WINDOWS_FFMPEG_PATH
    return 'ffmpeg'


def build_decode_command(container_path, ffmpeg_path=None):
    """
    Build the ffmpeg command line that writes raw PCM to stdout.

    Args:
        container_path: Input container file
        ffmpeg_path: ffmpeg executable (default: get_ffmpeg_path())

    Returns:
        list: Full argument vector
    """
    return [
        ffmpeg_path or get_ffmpeg_path(),
        '-loglevel', 'error',
        '-hide_banner',
        '-i', str(container_path),
        '-vn',  # Drop video
        '-ar', str(PCM_SAMPLE_RATE),
        '-ac', str(PCM_CHANNELS),
        '-channel_layout', PCM_CHANNEL_LAYOUT,
        '-acodec', PCM_CODEC,
        '-f', PCM_FORMAT,
        'pipe:1',
    ]


class StderrDrain(threading.Thread):
    """
    Reads a stream until EOF, keeping only the last few KB.

    Started right after the process so the pipe never fills up.
    """

    def __init__(self, stream, tail_bytes=STDERR_TAIL_BYTES):
        super().__init__(daemon=True, name='ffmpeg-stderr-drain')
        self.stream = stream
        self.tail_bytes = tail_bytes
        self._chunks = deque()
        self._size = 0

    def run(self):
        try:
            while True:
                chunk = self.stream.read(_READ_CHUNK)
                if not chunk:
                    break
                self._chunks.append(chunk)
                self._size += len(chunk)
                while self._size - len(self._chunks[0]) >= self.tail_bytes:
                    self._size -= len(self._chunks.popleft())
        except (OSError, ValueError):
            # Pipe closed under us while the process was being torn down
            pass

    def tail(self):
        data = b''.join(self._chunks)[-self.tail_bytes:]
        return data.decode('utf-8', errors='replace').strip()


def decode_to_pcm(container_path, ffmpeg_path=None, logger=None):
    """
    Decode a container file to raw PCM bytes.

    Args:
        container_path: Path to the compressed audio file
        ffmpeg_path: ffmpeg executable (default: get_ffmpeg_path())
        logger: Optional callable(str) for logging

    Returns:
        bytes: Interleaved s16le samples, 48 kHz, 2 channels

    Raises:
        DecodeFailed: If ffmpeg cannot start, the read fails or it exits nonzero
    """
    def log(message):
        if logger:
            logger(message)

    container_path = Path(container_path)
    cmd = build_decode_command(container_path, ffmpeg_path=ffmpeg_path)

    log(f'Decoding {container_path} to PCM')
    log(f"Running: {' '.join(cmd)}")

    try:
        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        raise DecodeFailed(f'decode failed: could not run {cmd[0]}: {e}') from e

    # Popen's context manager closes both pipes and waits on exit
    with proc:
        drain = StderrDrain(proc.stderr)
        drain.start()
        try:
            pcm_data = proc.stdout.read()
        except OSError as e:
            proc.kill()
            proc.wait()
            drain.join()
            raise DecodeFailed(f'decode failed: reading ffmpeg output: {e}', output=drain.tail()) from e

        returncode = proc.wait()
        drain.join()

    if returncode != 0:
        stderr_tail = drain.tail()
        log(f'ffmpeg stderr: {stderr_tail}')
        raise DecodeFailed(
            f'decode failed: ffmpeg exited with code {returncode}: {stderr_tail}',
            output=stderr_tail,
        )

    log(f'Decoded {len(pcm_data)} bytes of PCM')
    return pcm_data
