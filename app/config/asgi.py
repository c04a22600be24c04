"""
ASGI config for the Django application.

Uvicorn (or any ASGI server) uses this entry point. The handle registry has
no WebSocket surface, so the plain Django ASGI application is exposed.

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/howto/deployment/asgi/
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_asgi_application()
