"""
Request coordination for the /process endpoint and the fetch command.

process_request turns a query or URL into a video ID, looks up its metadata,
records the Video row and makes sure the audio is cached. Failures after the
metadata lookup are reported in the ProcessResult rather than raised.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from django.db import DatabaseError

from tracks.models import Video
from tracks.service.cache import ensure_cached
from tracks.service.config import get_search_max_results
from tracks.service.errors import PipelineError
from tracks.service.paths import resolve
from tracks.service.resolve import extract_video_id, watch_url
from tracks.service.youtube import SearchHit, VideoDetails, YouTubeApiError


class MissingParameter(Exception):
    """Raised when neither a query nor a URL was given"""

    pass


class NoResults(Exception):
    """Raised when a search query matched no videos"""

    pass


class MetadataUnavailable(Exception):
    """Raised when the search or the video details lookup fails"""

    pass


@dataclass
class ProcessResult:
    """Result of resolving and caching one request"""

    video: VideoDetails
    local_path: str
    db_status: str
    search_results: List[SearchHit] = field(default_factory=list)
    success: bool = True
    error: Optional[str] = None

    def as_dict(self):
        """JSON body for the /process endpoint, empty keys left out"""
        data = {
            'success': self.success,
            'metadata': {
                'id': self.video.id,
                'title': self.video.title,
                'channelId': self.video.channel_id,
                'channelTitle': self.video.channel_title,
                'duration': self.video.duration_seconds,
            },
            'local_path': self.local_path,
            'db_status': self.db_status,
        }
        if self.error:
            data['error'] = self.error
        if self.search_results:
            data['search_results'] = [
                {'id': hit.id, 'title': hit.title, 'duration': hit.duration}
                for hit in self.search_results
            ]
        return data


def save_video(video, local_path):
    """
    Upsert the video row.

    Returns:
        str: 'Success' or 'DB Save Failed: <reason>'. A database failure is
        reported, it never aborts the request.
    """
    try:
        Video.upsert(
            video_id=video.id,
            title=video.title,
            channel_id=video.channel_id,
            channel_title=video.channel_title,
            duration_seconds=video.duration_seconds,
            local_path=local_path,
        )
    except DatabaseError as e:
        return f'DB Save Failed: {e}'
    return 'Success'


def process_request(client, query=None, url=None, cache_root=None, logger=None):
    """
    Resolve a query or URL to a video and make sure its PCM is cached.

    This is the core operation used by:
    - Web /process endpoint
    - Management command: ./manage.py fetch

    Args:
        client: YouTubeClient used for search and video details
        query: Free text search query (first hit is used)
        url: Watch URL, short link or bare video ID (wins over query)
        cache_root: Cache root directory (default from settings)
        logger: Optional callable(message) for logging

    Returns:
        ProcessResult. A failed download/convert is reported in the result
        (success=False) with metadata and local path still filled in.

    Raises:
        MissingParameter: If neither query nor url is given
        NoResults: If the search matched nothing
        MetadataUnavailable: If the YouTube API calls fail
    """
    def log(message):
        if logger:
            logger(message)

    search_results = []

    if url:
        log(f'Request received (URL): {url}')
        video_id = extract_video_id(url)
    elif query:
        log(f'Request received (query): {query}')
        try:
            search_results = client.search(query, max_results=get_search_max_results())
        except YouTubeApiError as e:
            raise MetadataUnavailable(f'Search failed: {e}') from e
        if not search_results:
            raise NoResults('No results found')
        video_id = search_results[0].id
    else:
        raise MissingParameter('Missing query or url parameter')

    try:
        video = client.video_details(video_id)
    except YouTubeApiError as e:
        raise MetadataUnavailable(f'Failed to get video details: {e}') from e
    if video is None:
        raise MetadataUnavailable('Failed to get video details')

    for hit in search_results:
        if hit.id == video.id:
            hit.duration = video.duration_seconds

    target_path = resolve(video.channel_title, video.title, root=cache_root).absolute()
    db_status = save_video(video, target_path)

    result = ProcessResult(
        video=video,
        local_path=str(target_path),
        db_status=db_status,
        search_results=search_results,
    )

    try:
        ensure_cached(
            video.channel_title,
            video.title,
            watch_url(video.id),
            cache_root=cache_root,
            logger=logger,
        )
    except PipelineError as e:
        log(f'Download/convert failed: {e}')
        result.success = False
        result.error = f'Download/Convert failed: {e}'
    else:
        log(f'Ready: {target_path}')

    return result
