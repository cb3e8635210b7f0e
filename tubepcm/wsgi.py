"""
WSGI config for tubepcm project.

Exposes the WSGI callable as a module-level variable named ``application``.
Run it with any WSGI server, or ``./manage.py runserver 0.0.0.0:8080`` in
development.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'tubepcm.settings')

application = get_wsgi_application()
