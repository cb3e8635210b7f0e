"""
Audio format constants.

Centralized definitions of the cached PCM layout and file extensions.
"""

# Raw PCM written to the cache: no header, interleaved samples
PCM_SAMPLE_RATE = 48000
PCM_CHANNELS = 2
PCM_CHANNEL_LAYOUT = 'stereo'
PCM_CODEC = 'pcm_s16le'
PCM_FORMAT = 's16le'
PCM_BYTES_PER_SAMPLE = 2

# Cache entry extension
PCM_EXTENSION = '.pcm'

# Compressed container produced by the downloader
CONTAINER_FORMAT = 'opus'
CONTAINER_EXTENSION = '.opus'

# Suffix for in-progress writes that are renamed onto the cache entry
PARTIAL_EXTENSION = '.part'

# Characters that may not appear in a cache path component
FORBIDDEN_FILENAME_CHARS = '\\/:*?"<>|'

# Watch page used to hand a video ID to the downloader
YOUTUBE_WATCH_URL = 'https://www.youtube.com/watch?v={video_id}'
