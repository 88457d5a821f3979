# WSGI entry point for the Pipeline CRM project.
#
# Used by Gunicorn, uWSGI, etc.
# Run with: gunicorn config.wsgi:application
# ==============================================================================

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()
