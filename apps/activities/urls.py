from django.urls import path
from . import views

app_name = 'activities'

urlpatterns = [
    path('', views.activity_list_view, name='activity_list'),
    path('<uuid:pk>/edit/', views.activity_edit_view, name='activity_edit'),
    path('<uuid:pk>/delete/', views.activity_delete_view, name='activity_delete'),
    path('<uuid:pk>/toggle/', views.activity_toggle_view, name='activity_toggle'),
]
