from django.contrib import admin

from tracks.models import Video


@admin.register(Video)
class VideoAdmin(admin.ModelAdmin):
    list_display = ['title', 'channel_title', 'video_id', 'duration_seconds', 'updated_at']
    list_filter = ['channel_title']
    search_fields = ['title', 'channel_title', 'video_id']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-updated_at']
