"""
Management command to clean up abandoned transient files.

Finds and removes .opus containers and .part writes that were left behind
in the cache when a process was killed mid-download or mid-write. Cached
.pcm entries are never touched.
"""
from datetime import timedelta
from pathlib import Path

from django.core.management.base import BaseCommand
from django.utils import timezone

from tracks.service.config import get_cache_dir
from tracks.service.constants import CONTAINER_EXTENSION, PARTIAL_EXTENSION


def find_transient_files(cache_dir):
    """All transient files under the cache root, entries excluded"""
    cache_dir = Path(cache_dir)
    if not cache_dir.exists():
        return []
    return sorted(
        f for f in cache_dir.rglob('*')
        if f.is_file() and f.suffix in (CONTAINER_EXTENSION, PARTIAL_EXTENSION)
    )


class Command(BaseCommand):
    help = 'Clean up abandoned .opus and .part files from interrupted fetches'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without actually deleting'
        )
        parser.add_argument(
            '--max-age',
            type=int,
            default=60,
            help='Maximum age in minutes before considering a file abandoned (default: 60)'
        )
        parser.add_argument(
            '--cache-dir', type=str, default=None, help='Cache root directory (default: TUBEPCM_CACHE_DIR)'
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        max_age = timedelta(minutes=options['max_age'])
        cache_dir = Path(options['cache_dir']) if options['cache_dir'] else get_cache_dir()

        transient_files = find_transient_files(cache_dir)
        if not transient_files:
            self.stdout.write(self.style.SUCCESS("No transient files found"))
            return

        now = timezone.now()
        old_files = []
        for path in transient_files:
            mtime = timezone.datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.get_current_timezone())
            if now - mtime > max_age:
                old_files.append(path)

        if not old_files:
            self.stdout.write(self.style.SUCCESS(
                f"Found {len(transient_files)} transient file(s), "
                f"but none are older than {options['max_age']} minutes"
            ))
            return

        total_size = sum(f.stat().st_size for f in old_files)
        for path in old_files:
            self.stdout.write(f"  {path.relative_to(cache_dir)}")
        self.stdout.write(f"Total size: {total_size / (1024 * 1024):.1f} MB")

        if dry_run:
            self.stdout.write(self.style.WARNING(f"DRY RUN: Would delete {len(old_files)} file(s)"))
            return

        deleted = 0
        for path in old_files:
            try:
                path.unlink()
                deleted += 1
            except FileNotFoundError:
                pass
            except OSError as e:
                self.stderr.write(self.style.ERROR(f"Failed to delete {path}: {e}"))

        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} file(s)"))
