from django.urls import path
from . import views

app_name = 'notes'

urlpatterns = [
    path('new/', views.note_create_view, name='note_create'),
    path('<uuid:pk>/edit/', views.note_edit_view, name='note_edit'),
    path('<uuid:pk>/delete/', views.note_delete_view, name='note_delete'),
]
