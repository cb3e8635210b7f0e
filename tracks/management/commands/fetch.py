"""
Django management command for fetching a track into the PCM cache.

Resolves a URL, video ID or search query the same way the /process endpoint
does, downloads and decodes it on a cache miss, and prints where the PCM
file lives.
"""

import json

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from tracks.operations import (
    MetadataUnavailable,
    MissingParameter,
    NoResults,
    process_request,
)


class Command(BaseCommand):
    help = 'Fetch a track by URL, video ID or search query and cache it as raw PCM'

    def add_arguments(self, parser):
        parser.add_argument('input', type=str, help='Watch URL, video ID, or search text with --query')
        parser.add_argument(
            '--query',
            action='store_true',
            help='Treat input as a search query and use the first hit',
        )
        parser.add_argument(
            '--cache-dir', type=str, default=None, help='Cache root directory (default: TUBEPCM_CACHE_DIR)'
        )
        parser.add_argument('--verbose', action='store_true', help='Enable verbose output')
        parser.add_argument('--json', action='store_true', help='Output result as JSON')

    def handle(self, *args, **options):
        input_value = options['input']
        verbose = options['verbose']
        output_json = options['json']

        client = apps.get_app_config('tracks').youtube_client
        logger = self.stdout.write if verbose and not output_json else None

        try:
            if options['query']:
                result = process_request(
                    client, query=input_value, cache_root=options['cache_dir'], logger=logger
                )
            else:
                result = process_request(
                    client, url=input_value, cache_root=options['cache_dir'], logger=logger
                )
        except (MissingParameter, NoResults, MetadataUnavailable) as e:
            if output_json:
                self.stdout.write(json.dumps({'success': False, 'error': str(e)}))
            raise CommandError(str(e))

        if output_json:
            self.stdout.write(json.dumps(result.as_dict(), indent=2, ensure_ascii=False))
        elif result.success:
            self.stdout.write(self.style.SUCCESS('✓ Cached'))
            self.stdout.write(f'  ID: {result.video.id}')
            self.stdout.write(f'  Title: {result.video.title}')
            self.stdout.write(f'  Channel: {result.video.channel_title}')
            if result.video.duration_seconds:
                mins = result.video.duration_seconds // 60
                secs = result.video.duration_seconds % 60
                self.stdout.write(f'  Duration: {mins}:{secs:02d}')
            self.stdout.write(f'  Path: {result.local_path}')
            self.stdout.write(f'  DB: {result.db_status}')

        if not result.success:
            raise CommandError(result.error)
