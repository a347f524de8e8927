# backend/wsgi.py
"""
WSGI config for the canteen backend.
Defaults to dev settings unless DJANGO_SETTINGS_MODULE is set (prod must set it).
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings.dev")

application = get_wsgi_application()
