from django.urls import path
from . import views


app_name = 'core'

urlpatterns = [
    path('companies', views.company_list_view, name='companies'),
    path('activities', views.activity_list_view, name='activities'),
    path('kpis', views.kpis_view, name='kpis'),
]
