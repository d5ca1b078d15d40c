"""
WSGI config for the medsys project.

It exposes the WSGI callable as a module-level variable named ``application``.
Realtime alert delivery needs the ASGI entrypoint in ``medsys.asgi``.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'medsys.settings')

application = get_wsgi_application()
