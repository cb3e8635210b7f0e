"""
Tests for service/config.py
"""
from pathlib import Path

from django.test import TestCase, override_settings

from tracks.service.config import (
    debug_log_enabled,
    get_cache_dir,
    get_ffmpeg_path_setting,
    get_search_max_results,
    get_youtube_api_key,
    get_ytdlp_command_setting,
    get_ytdlp_extra_args,
)


class ConfigServiceTest(TestCase):
    """Tests for configuration adapter"""

    @override_settings(TUBEPCM_CACHE_DIR='/tmp/pcm-cache')
    def test_get_cache_dir(self):
        """Test that the cache dir is returned as a Path"""
        self.assertEqual(get_cache_dir(), Path('/tmp/pcm-cache'))

    @override_settings(TUBEPCM_FFMPEG_PATH='')
    def test_get_ffmpeg_path_unset(self):
        """Test empty ffmpeg setting"""
        self.assertEqual(get_ffmpeg_path_setting(), '')

    @override_settings(TUBEPCM_YTDLP_COMMAND='')
    def test_get_ytdlp_command_unset(self):
        """Test empty downloader setting gives an empty prefix"""
        self.assertEqual(get_ytdlp_command_setting(), [])

    @override_settings(TUBEPCM_YTDLP_COMMAND='"/opt/my venv/bin/python" -m yt_dlp')
    def test_get_ytdlp_command_split(self):
        """Test that the downloader command is split shell-style"""
        self.assertEqual(get_ytdlp_command_setting(), ['/opt/my venv/bin/python', '-m', 'yt_dlp'])

    @override_settings(TUBEPCM_YTDLP_PROXY='', TUBEPCM_YTDLP_EXTRA_ARGS='')
    def test_get_ytdlp_extra_args_empty(self):
        """Test no extra args by default"""
        self.assertEqual(get_ytdlp_extra_args(), [])

    @override_settings(
        TUBEPCM_YTDLP_PROXY='socks5://127.0.0.1:1080',
        TUBEPCM_YTDLP_EXTRA_ARGS='--sleep-interval 2 --cookies "/tmp/my cookies.txt"',
    )
    def test_get_ytdlp_extra_args_proxy_first(self):
        """Test that the proxy comes before the extra args"""
        self.assertEqual(
            get_ytdlp_extra_args(),
            ['--proxy', 'socks5://127.0.0.1:1080', '--sleep-interval', '2', '--cookies', '/tmp/my cookies.txt'],
        )

    @override_settings(TUBEPCM_YOUTUBE_API_KEY='key-123', TUBEPCM_SEARCH_MAX_RESULTS=3)
    def test_youtube_settings(self):
        """Test YouTube settings accessors"""
        self.assertEqual(get_youtube_api_key(), 'key-123')
        self.assertEqual(get_search_max_results(), 3)

    @override_settings(TUBEPCM_DEBUG_LOG=False)
    def test_debug_log_disabled(self):
        """Test debug log flag"""
        self.assertFalse(debug_log_enabled())
