# WSGI (Web Server Gateway Interface) configuration
#
# Serves the REST API only. The /ws notification channel needs the ASGI
# application (see asgi.py); deploy with Daphne when WebSocket is required.
# ==============================================================================

import os
from django.core.wsgi import get_wsgi_application

# Points to config/settings.py
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()

# Run: gunicorn config.wsgi:application --bind 0.0.0.0:8000 --workers 4
#
# Set in production:
#    - DEBUG=False
#    - SECRET_KEY=<random-value>
#    - ALLOWED_HOSTS=yourdomain.com
#    - DB_ENGINE=django.db.backends.postgresql
