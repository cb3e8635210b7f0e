from django.apps import AppConfig


class TracksConfig(AppConfig):
    name = 'tracks'
    default_auto_field = 'django.db.models.BigAutoField'

    youtube_client = None

    def ready(self):
        """Build the YouTube client once for the whole process"""
        from tracks.service.config import get_youtube_api_key, get_youtube_application_name
        from tracks.service.youtube import YouTubeClient

        self.youtube_client = YouTubeClient(
            get_youtube_api_key(),
            application_name=get_youtube_application_name(),
        )
