"""
Identifier resolution.

Turns whatever the user pasted (watch URL, short link, shorts/embed URL or a
bare ID) into a YouTube video ID.
"""

from urllib.parse import parse_qs, urlparse

from tracks.service.constants import YOUTUBE_WATCH_URL

_PATH_PREFIXES = ('/shorts/', '/embed/', '/live/', '/v/')
_HOST_PREFIXES = ('www.', 'youtube.com', 'youtu.be', 'm.youtube.com', 'music.youtube.com')


def extract_video_id(url_input):
    """
    Extract a video ID from a URL, or return the input if it is already an ID.

    Examples:
        >>> extract_video_id('https://www.youtube.com/watch?v=abc123&t=10')
        'abc123'
        >>> extract_video_id('https://youtu.be/abc123?si=x')
        'abc123'
        >>> extract_video_id('abc123')
        'abc123'
    """
    url_input = url_input.strip()
    if '://' not in url_input and not url_input.startswith(_HOST_PREFIXES) and 'v=' not in url_input:
        return url_input

    parsed = urlparse(url_input if '://' in url_input else f'https://{url_input}')
    host = (parsed.hostname or '').lower()

    if host == 'youtu.be' or host.endswith('.youtu.be'):
        video_id = parsed.path.lstrip('/').split('/')[0]
        if video_id:
            return video_id

    video_ids = parse_qs(parsed.query).get('v')
    if video_ids and video_ids[0]:
        return video_ids[0]

    for prefix in _PATH_PREFIXES:
        if parsed.path.startswith(prefix):
            video_id = parsed.path[len(prefix):].split('/')[0]
            if video_id:
                return video_id

    # Not a shape we know, hand it over as-is
    return url_input


def watch_url(video_id):
    """Watch page URL handed to the downloader"""
    return YOUTUBE_WATCH_URL.format(video_id=video_id)
