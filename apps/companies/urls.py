from django.urls import path
from . import views

app_name = 'companies'

urlpatterns = [
    path('', views.company_list_view, name='company_list'),
    path('new/', views.company_create_view, name='company_create'),
    path('<uuid:pk>/', views.company_detail_view, name='company_detail'),
    path('<uuid:pk>/edit/', views.company_edit_view, name='company_edit'),
    path('<uuid:pk>/delete/', views.company_delete_view, name='company_delete'),
]
