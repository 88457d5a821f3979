from django.urls import path
from . import views

app_name = 'contacts'

urlpatterns = [
    path('', views.contact_list_view, name='contact_list'),
    path('new/', views.contact_create_view, name='contact_create'),
    path('<uuid:pk>/', views.contact_detail_view, name='contact_detail'),
    path('<uuid:pk>/edit/', views.contact_edit_view, name='contact_edit'),
    path('<uuid:pk>/delete/', views.contact_delete_view, name='contact_delete'),
]
