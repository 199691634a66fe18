# ASGI (Asynchronous Server Gateway Interface) configuration

# ASGI is the async successor to WSGI
# Required here for the /ws notification channel (appointment events)
#
# Production servers:
# - Daphne (Django Channels official server)
# - Uvicorn
# ==============================================================================

import os
from django.core.asgi import get_asgi_application
from channels.routing import ProtocolTypeRouter, URLRouter
from channels.auth import AuthMiddlewareStack
from channels.security.websocket import AllowedHostsOriginValidator

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# Initialize Django ASGI application early
# This ensures the AppRegistry is populated before importing code that may import ORM models
django_asgi_app = get_asgi_application()

# Import routing after Django setup
# This prevents "Apps aren't loaded yet" error
from apps.core.routing import websocket_urlpatterns  # noqa: E402


# ASGI APPLICATION

# ProtocolTypeRouter dispatches connections based on protocol type
# - 'http': Regular HTTP requests → Django views
# - 'websocket': WebSocket connections → Channels consumers
application = ProtocolTypeRouter({
    'http': django_asgi_app,

    # AuthMiddlewareStack puts the session user in scope['user'];
    # the consumer takes the company from that user, never from the message
    'websocket': AllowedHostsOriginValidator(
        AuthMiddlewareStack(
            URLRouter(websocket_urlpatterns)
        )
    ),
})

# ==============================================================================
# DEPLOYMENT
# ==============================================================================
#
# Run: daphne config.asgi:application --bind 0.0.0.0 --port 8000
#
# Behind Nginx, proxy /ws with the Upgrade/Connection headers:
#
#     location /ws {
#         proxy_pass http://imobiliaria;
#         proxy_http_version 1.1;
#         proxy_set_header Upgrade $http_upgrade;
#         proxy_set_header Connection "upgrade";
#         proxy_set_header Host $host;
#     }
#
# Several Daphne instances need REDIS_URL so they share one channel layer.
# ==============================================================================
