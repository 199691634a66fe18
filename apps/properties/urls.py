from django.urls import path
from . import views

app_name = 'properties'

urlpatterns = [
    path('properties', views.property_list_view, name='list'),
    path('properties/<int:pk>', views.property_detail_view, name='detail'),
]
