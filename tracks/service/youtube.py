"""
YouTube Data API v3 client.

Only the two calls the /process endpoint needs: a video search and the
details of a single video.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

import requests

API_BASE_URL = 'https://www.googleapis.com/youtube/v3'

_DURATION_RE = re.compile(
    r'^P(?:(?P<days>\d+)D)?'
    r'(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$'
)


class YouTubeApiError(Exception):
    """Raised when the API cannot be reached or returns an error payload"""

    pass


@dataclass
class SearchHit:
    """One video returned by a search"""

    id: str
    title: str
    duration: int = 0


@dataclass
class VideoDetails:
    """Snippet and content details of a single video"""

    id: str
    title: str
    channel_id: str
    channel_title: str
    duration_seconds: int = 0


def parse_iso8601_duration(value):
    """
    Parse an ISO 8601 duration as returned in contentDetails.duration.

    Returns:
        int: Seconds, or 0 if the value is empty or not understood

    Example:
        >>> parse_iso8601_duration('PT1H2M3S')
        3723
    """
    if not value:
        return 0
    match = _DURATION_RE.match(value)
    if not match:
        return 0
    parts = match.groupdict()
    total = (
        int(parts['days'] or 0) * 86400
        + int(parts['hours'] or 0) * 3600
        + int(parts['minutes'] or 0) * 60
        + float(parts['seconds'] or 0)
    )
    return int(total)


class YouTubeClient:
    """
    Thin wrapper over the YouTube Data API.

    Build one per process and pass it to whoever needs it.
    """

    def __init__(self, api_key, application_name='tubepcm', session=None, timeout=15):
        self.api_key = api_key
        self.application_name = application_name
        if session is None:
            session = requests.Session()
            session.headers['User-Agent'] = f'{application_name} {session.headers["User-Agent"]}'
        self.session = session
        self.timeout = timeout

    def _get(self, resource, params):
        if not self.api_key:
            raise YouTubeApiError('YouTube API key is not configured')

        params = dict(params, key=self.api_key)
        try:
            response = self.session.get(f'{API_BASE_URL}/{resource}', params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise YouTubeApiError(f'{resource} request failed: {e}') from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.status_code != 200:
            message = payload.get('error', {}).get('message') if isinstance(payload, dict) else None
            raise YouTubeApiError(f'{resource} returned HTTP {response.status_code}: {message or response.text[:200]}')

        return payload

    def search(self, query, max_results=5) -> List[SearchHit]:
        """
        Search for videos matching a query.

        Args:
            query: Free text search query
            max_results: Maximum number of hits

        Returns:
            list of SearchHit, best match first
        """
        payload = self._get('search', {
            'part': 'id,snippet',
            'q': query,
            'maxResults': max_results,
            'type': 'video',
        })

        hits = []
        for item in payload.get('items', []):
            video_id = item.get('id', {}).get('videoId')
            if not video_id:
                continue
            hits.append(SearchHit(id=video_id, title=item.get('snippet', {}).get('title', '')))
        return hits

    def video_details(self, video_id) -> Optional[VideoDetails]:
        """
        Fetch snippet and duration of a video.

        Returns:
            VideoDetails, or None if the video does not exist
        """
        payload = self._get('videos', {
            'part': 'snippet,contentDetails',
            'id': video_id,
        })

        items = payload.get('items', [])
        if not items:
            return None

        item = items[0]
        snippet = item.get('snippet', {})
        return VideoDetails(
            id=item.get('id', video_id),
            title=snippet.get('title', ''),
            channel_id=snippet.get('channelId', ''),
            channel_title=snippet.get('channelTitle', ''),
            duration_seconds=parse_iso8601_duration(item.get('contentDetails', {}).get('duration')),
        )
