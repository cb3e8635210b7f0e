from django.db import models


class Video(models.Model):
    """A YouTube video that has been requested through /process"""

    # YouTube video ID
    video_id = models.CharField(max_length=64, primary_key=True)

    # Metadata
    title = models.CharField(max_length=500, blank=True)
    channel_id = models.CharField(max_length=64, blank=True)
    channel_title = models.CharField(max_length=200, blank=True)
    duration_seconds = models.IntegerField(default=0)

    # Absolute path of the cached PCM file
    local_path = models.CharField(max_length=1024, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at']
        indexes = [
            models.Index(fields=['channel_title'], name='tracks_vide_channel_5b1c9e_idx'),
        ]

    def __str__(self):
        return f'{self.title} ({self.video_id})'

    @classmethod
    def upsert(cls, video_id, title, channel_id, channel_title, duration_seconds, local_path=''):
        """Insert the video, or update it if the ID is already known"""
        video, _ = cls.objects.update_or_create(
            video_id=video_id,
            defaults={
                'title': title,
                'channel_id': channel_id,
                'channel_title': channel_title,
                'duration_seconds': duration_seconds,
                'local_path': str(local_path),
            },
        )
        return video
