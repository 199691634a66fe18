from django.urls import path
from . import views

app_name = 'appointments'

urlpatterns = [
    path('appointments', views.appointment_list_view, name='list'),
    path('appointments/<int:pk>', views.appointment_detail_view, name='detail'),
]
