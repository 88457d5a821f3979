# ASGI entry point for the Pipeline CRM project.
#
# Serves plain HTTP only (no websockets).
# Run with: uvicorn config.asgi:application
# ==============================================================================

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_asgi_application()
