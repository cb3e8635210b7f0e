"""
Tests for service/youtube.py
"""
from unittest.mock import MagicMock

import requests
from django.test import TestCase

from tracks.service.youtube import (
    SearchHit,
    VideoDetails,
    YouTubeApiError,
    YouTubeClient,
    parse_iso8601_duration,
)


def make_response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response


class ParseDurationTest(TestCase):
    """Tests for ISO 8601 duration parsing"""

    def test_full(self):
        self.assertEqual(parse_iso8601_duration('PT1H2M3S'), 3723)

    def test_minutes_seconds(self):
        self.assertEqual(parse_iso8601_duration('PT4M13S'), 253)

    def test_days(self):
        self.assertEqual(parse_iso8601_duration('P1DT1S'), 86401)

    def test_live_and_empty(self):
        """Test live streams (P0D) and missing values"""
        self.assertEqual(parse_iso8601_duration('P0D'), 0)
        self.assertEqual(parse_iso8601_duration(''), 0)
        self.assertEqual(parse_iso8601_duration(None), 0)

    def test_garbage(self):
        self.assertEqual(parse_iso8601_duration('four minutes'), 0)


class YouTubeClientTest(TestCase):
    """Tests for the YouTube Data API client"""

    def setUp(self):
        self.session = MagicMock()
        self.client = YouTubeClient('test-key', session=self.session)

    def test_search(self):
        """Test that search hits are parsed in order"""
        self.session.get.return_value = make_response({
            'items': [
                {'id': {'kind': 'youtube#video', 'videoId': 'id1'}, 'snippet': {'title': 'First'}},
                {'id': {'kind': 'youtube#channel', 'channelId': 'c1'}, 'snippet': {'title': 'Channel'}},
                {'id': {'kind': 'youtube#video', 'videoId': 'id2'}, 'snippet': {'title': 'Second'}},
            ]
        })

        hits = self.client.search('lofi', max_results=5)

        self.assertEqual(hits, [SearchHit(id='id1', title='First'), SearchHit(id='id2', title='Second')])
        url = self.session.get.call_args[0][0]
        params = self.session.get.call_args[1]['params']
        self.assertTrue(url.endswith('/search'))
        self.assertEqual(params['q'], 'lofi')
        self.assertEqual(params['type'], 'video')
        self.assertEqual(params['maxResults'], 5)
        self.assertEqual(params['key'], 'test-key')

    def test_search_empty(self):
        """Test no items"""
        self.session.get.return_value = make_response({'items': []})
        self.assertEqual(self.client.search('nothing'), [])

    def test_video_details(self):
        """Test snippet and duration parsing"""
        self.session.get.return_value = make_response({
            'items': [{
                'id': 'id1',
                'snippet': {'title': 'Song: Live', 'channelId': 'UC1', 'channelTitle': 'Band/Official'},
                'contentDetails': {'duration': 'PT3M30S'},
            }]
        })

        details = self.client.video_details('id1')

        self.assertEqual(details, VideoDetails(
            id='id1', title='Song: Live', channel_id='UC1', channel_title='Band/Official', duration_seconds=210,
        ))
        params = self.session.get.call_args[1]['params']
        self.assertEqual(params['id'], 'id1')
        self.assertEqual(params['part'], 'snippet,contentDetails')

    def test_video_details_not_found(self):
        """Test that an unknown ID gives None"""
        self.session.get.return_value = make_response({'items': []})
        self.assertIsNone(self.client.video_details('missing'))

    def test_http_error(self):
        """Test that an API error payload raises YouTubeApiError"""
        self.session.get.return_value = make_response(
            {'error': {'code': 403, 'message': 'quotaExceeded'}}, status_code=403
        )
        with self.assertRaises(YouTubeApiError) as ctx:
            self.client.search('lofi')
        self.assertIn('quotaExceeded', str(ctx.exception))

    def test_network_error(self):
        """Test that connection errors raise YouTubeApiError"""
        self.session.get.side_effect = requests.ConnectionError('unreachable')
        with self.assertRaises(YouTubeApiError):
            self.client.video_details('id1')

    def test_missing_api_key(self):
        """Test that no request is made without a key"""
        client = YouTubeClient('', session=self.session)
        with self.assertRaises(YouTubeApiError):
            client.search('lofi')
        self.session.get.assert_not_called()
