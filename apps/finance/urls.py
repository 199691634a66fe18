from django.urls import path
from . import views

app_name = 'finance'

urlpatterns = [
    path('transactions', views.transaction_list_view, name='list'),
    path('transactions/<int:pk>', views.transaction_detail_view, name='detail'),
]
