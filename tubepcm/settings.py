"""
Django settings for tubepcm project.

Every TUBEPCM_* value can be overridden from the environment so the same
settings module works for the web server, the CLI commands and the tests.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-tubepcm-dev-key')

DEBUG = _env_bool('DJANGO_DEBUG', True)

ALLOWED_HOSTS = [
    h.strip() for h in os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',')
    if h.strip()
]

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'tracks',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'tubepcm.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'tubepcm.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.environ.get('TUBEPCM_DB_PATH', str(BASE_DIR / 'db.sqlite3')),
    }
}

AUTH_PASSWORD_VALIDATORS = []

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Cache of decoded PCM files: <TUBEPCM_CACHE_DIR>/<channel>/<title>.pcm
TUBEPCM_CACHE_DIR = Path(os.environ.get('TUBEPCM_CACHE_DIR', str(BASE_DIR / 'db')))

# Decoder executable. Empty means platform lookup (see tracks.service.decode).
TUBEPCM_FFMPEG_PATH = os.environ.get('TUBEPCM_FFMPEG_PATH', '')

# Downloader command line prefix, e.g. "yt-dlp" or "/opt/venv/bin/python -m yt_dlp".
# Empty means yt-dlp from PATH, falling back to the running interpreter's yt_dlp module.
TUBEPCM_YTDLP_COMMAND = os.environ.get('TUBEPCM_YTDLP_COMMAND', '')

# Proxy for yt-dlp (needed on cloud VMs where YouTube blocks requests)
TUBEPCM_YTDLP_PROXY = os.environ.get('TUBEPCM_YTDLP_PROXY', '')

# Extra yt-dlp arguments appended after the fixed audio extraction set
TUBEPCM_YTDLP_EXTRA_ARGS = os.environ.get('TUBEPCM_YTDLP_EXTRA_ARGS', '')

# YouTube Data API v3
TUBEPCM_YOUTUBE_API_KEY = os.environ.get('TUBEPCM_YOUTUBE_API_KEY', '')
TUBEPCM_YOUTUBE_APPLICATION_NAME = os.environ.get('TUBEPCM_YOUTUBE_APPLICATION_NAME', 'tubepcm')
TUBEPCM_SEARCH_MAX_RESULTS = int(os.environ.get('TUBEPCM_SEARCH_MAX_RESULTS', '5'))

# Print [DEBUG] request lines from the /process endpoint
TUBEPCM_DEBUG_LOG = _env_bool('TUBEPCM_DEBUG_LOG', True)
