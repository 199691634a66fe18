from django.contrib import admin
from django.urls import path, include

# Main URL Configuration
# Every API route lives under /api/; the WebSocket route is in apps/core/routing.py

urlpatterns = [

    path('admin/', admin.site.urls),
    path('api/', include('apps.accounts.urls')),
    path('api/', include('apps.core.urls')),
    path('api/', include('apps.properties.urls')),
    path('api/', include('apps.clients.urls')),
    path('api/', include('apps.appointments.urls')),
    path('api/', include('apps.contracts.urls')),
    path('api/', include('apps.finance.urls')),
    path('api/', include('apps.constructions.urls')),

]
