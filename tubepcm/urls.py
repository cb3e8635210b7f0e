"""
URL configuration for tubepcm project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/stable/topics/http/urls/
"""

from django.contrib import admin
from django.urls import path

from tracks.views import process_view

admin.site.site_header = 'tubepcm Administration'
admin.site.site_title = 'tubepcm site admin'


urlpatterns = [
    path('process', process_view, name='process'),
    path('admin/', admin.site.urls),
]
