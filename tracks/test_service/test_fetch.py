"""
Tests for service/fetch.py
"""
import sys
import tempfile
from pathlib import Path
from unittest.mock import patch

from django.test import TestCase, override_settings

from tracks.service.errors import FetchFailed
from tracks.service.fetch import build_fetch_command, fetch_audio, get_ytdlp_command

# Stand-in for yt-dlp: writes a fake container to the path after -o
FAKE_YTDLP_OK = '''
import sys
args = sys.argv[1:]
out = args[args.index('-o') + 1]
with open(out, 'wb') as f:
    f.write(b'OggS fake opus')
print('[download] 100% of 14B')
'''

FAKE_YTDLP_FAIL = '''
import sys
print('[youtube] abc123: Downloading webpage')
sys.stderr.write('ERROR: Video unavailable\\n')
sys.exit(1)
'''

FAKE_YTDLP_NO_FILE = '''
print('nothing written')
'''


def fake_ytdlp(script):
    return patch('tracks.service.fetch.get_ytdlp_command', return_value=[sys.executable, '-c', script])


class BuildFetchCommandTest(TestCase):
    """Tests for the yt-dlp command line"""

    @override_settings(TUBEPCM_YTDLP_COMMAND='yt-dlp', TUBEPCM_YTDLP_PROXY='', TUBEPCM_YTDLP_EXTRA_ARGS='')
    def test_fixed_arguments(self):
        """Test audio-only, opus, best quality, no playlist/part/mtime"""
        cmd = build_fetch_command('https://www.youtube.com/watch?v=abc123', Path('/c/A/B.opus'))
        self.assertEqual(cmd, [
            'yt-dlp',
            '-x',
            '--audio-format', 'opus',
            '--audio-quality', '0',
            '--no-playlist',
            '--no-part',
            '--no-mtime',
            '-o', '/c/A/B.opus',
            'https://www.youtube.com/watch?v=abc123',
        ])

    @override_settings(TUBEPCM_YTDLP_COMMAND='yt-dlp', TUBEPCM_YTDLP_PROXY='http://proxy:3128')
    def test_proxy_before_output(self):
        """Test that configured extra args go before -o"""
        cmd = build_fetch_command('abc123', '/tmp/x.opus')
        self.assertLess(cmd.index('--proxy'), cmd.index('-o'))
        self.assertEqual(cmd[-1], 'abc123')

    @override_settings(TUBEPCM_YTDLP_COMMAND='/usr/local/bin/yt-dlp --ignore-config')
    def test_configured_command(self):
        """Test that the setting wins"""
        self.assertEqual(get_ytdlp_command(), ['/usr/local/bin/yt-dlp', '--ignore-config'])

    @override_settings(TUBEPCM_YTDLP_COMMAND='')
    @patch('tracks.service.fetch.shutil.which', return_value='/usr/bin/yt-dlp')
    def test_command_from_path(self, mock_which):
        """Test yt-dlp on PATH"""
        self.assertEqual(get_ytdlp_command(), ['yt-dlp'])

    @override_settings(TUBEPCM_YTDLP_COMMAND='')
    @patch('tracks.service.fetch.shutil.which', return_value=None)
    def test_command_module_fallback(self, mock_which):
        """Test falling back to the yt_dlp module of this interpreter"""
        self.assertEqual(get_ytdlp_command(), [sys.executable, '-m', 'yt_dlp'])


class FetchAudioTest(TestCase):
    """Tests for running the downloader"""

    def test_fetch_success(self):
        """Test that the container exists after a zero exit"""
        with tempfile.TemporaryDirectory() as temp_dir:
            destination = Path(temp_dir) / 'song.opus'
            with fake_ytdlp(FAKE_YTDLP_OK):
                result = fetch_audio('abc123', destination)

            self.assertEqual(result, destination)
            self.assertEqual(destination.read_bytes(), b'OggS fake opus')

    def test_fetch_nonzero_exit(self):
        """Test that a nonzero exit raises FetchFailed with combined output"""
        with tempfile.TemporaryDirectory() as temp_dir:
            destination = Path(temp_dir) / 'song.opus'
            with fake_ytdlp(FAKE_YTDLP_FAIL):
                with self.assertRaises(FetchFailed) as ctx:
                    fetch_audio('abc123', destination)

            # stdout and stderr are both captured
            self.assertIn('Downloading webpage', ctx.exception.output)
            self.assertIn('Video unavailable', ctx.exception.output)
            self.assertIn('code 1', str(ctx.exception))

    def test_fetch_missing_file(self):
        """Test that a zero exit without an output file is a failure"""
        with tempfile.TemporaryDirectory() as temp_dir:
            destination = Path(temp_dir) / 'song.opus'
            with fake_ytdlp(FAKE_YTDLP_NO_FILE):
                with self.assertRaises(FetchFailed) as ctx:
                    fetch_audio('abc123', destination)
            self.assertIn('nothing written', ctx.exception.output)

    def test_fetch_executable_not_found(self):
        """Test that a missing downloader raises FetchFailed"""
        with tempfile.TemporaryDirectory() as temp_dir:
            with patch('tracks.service.fetch.get_ytdlp_command', return_value=['/nonexistent/yt-dlp']):
                with self.assertRaises(FetchFailed):
                    fetch_audio('abc123', Path(temp_dir) / 'song.opus')

    def test_fetch_with_logger(self):
        """Test fetch with logger callback"""
        logs = []
        with tempfile.TemporaryDirectory() as temp_dir:
            with fake_ytdlp(FAKE_YTDLP_OK):
                fetch_audio('abc123', Path(temp_dir) / 'song.opus', logger=logs.append)

        self.assertTrue(any('Downloading with yt-dlp' in log for log in logs))
