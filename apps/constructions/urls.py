from django.urls import path
from . import views

app_name = 'constructions'

urlpatterns = [
    path('constructions', views.construction_list_view, name='list'),
    path('constructions/<int:pk>', views.construction_detail_view, name='detail'),

    path('constructions/<int:pk>/tasks', views.task_list_view, name='task_list'),
    path('constructions/<int:pk>/tasks/<int:task_id>', views.task_detail_view, name='task_detail'),

    path('constructions/<int:pk>/expenses', views.expense_list_view, name='expense_list'),
    path('constructions/<int:pk>/expenses/<int:expense_id>', views.expense_detail_view, name='expense_detail'),
]
