"""
Configuration adapter for pipeline settings.

Centralizes access to Django settings, ensuring consistent configuration
across the CLI and the web app.
"""

import shlex
from pathlib import Path

from django.conf import settings


def get_cache_dir():
    """Get the root directory of the PCM cache"""
    return Path(settings.TUBEPCM_CACHE_DIR)


def get_ffmpeg_path_setting():
    """Get the configured ffmpeg executable, or '' for platform lookup"""
    return settings.TUBEPCM_FFMPEG_PATH or ''


def get_ytdlp_command_setting():
    """
    Get the configured downloader command prefix.

    Returns:
        list: Command prefix split shell-style (empty if not configured)
    """
    command = settings.TUBEPCM_YTDLP_COMMAND
    if not command:
        return []
    return shlex.split(command)


def get_ytdlp_extra_args():
    """
    Get extra yt-dlp command-line arguments.

    Proxy setting comes first, followed by TUBEPCM_YTDLP_EXTRA_ARGS.

    Returns:
        list: Extra arguments to insert before the output path
    """
    args = []
    if settings.TUBEPCM_YTDLP_PROXY:
        args.extend(['--proxy', settings.TUBEPCM_YTDLP_PROXY])
    if settings.TUBEPCM_YTDLP_EXTRA_ARGS:
        args.extend(shlex.split(settings.TUBEPCM_YTDLP_EXTRA_ARGS))
    return args


def get_youtube_api_key():
    """Get the YouTube Data API key"""
    return settings.TUBEPCM_YOUTUBE_API_KEY


def get_youtube_application_name():
    """Get the application name sent to the YouTube Data API"""
    return settings.TUBEPCM_YOUTUBE_APPLICATION_NAME


def get_search_max_results():
    """Get how many search hits to request for a text query"""
    return settings.TUBEPCM_SEARCH_MAX_RESULTS


def debug_log_enabled():
    """Whether the /process endpoint prints [DEBUG] lines"""
    return bool(settings.TUBEPCM_DEBUG_LOG)
