from django.urls import path
from . import views

app_name = 'contracts'

urlpatterns = [
    path('contracts', views.contract_list_view, name='list'),
    path('contracts/<int:pk>', views.contract_detail_view, name='detail'),
]
