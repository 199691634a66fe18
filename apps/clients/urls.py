from django.urls import path
from . import views

app_name = 'clients'

urlpatterns = [
    path('clients', views.client_list_view, name='list'),
    path('clients/pipeline', views.client_pipeline_view, name='pipeline'),
    path('clients/<int:pk>', views.client_detail_view, name='detail'),
    path('clients/<int:pk>/interactions', views.client_interactions_view, name='interactions'),
]
