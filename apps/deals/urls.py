from django.urls import path
from . import views

app_name = 'deals'

urlpatterns = [
    path('', views.deal_board_view, name='deal_board'),
    path('list/', views.deal_list_view, name='deal_list'),
    path('new/', views.deal_create_view, name='deal_create'),
    path('move/', views.deal_move_view, name='deal_move'),
    path('reorder/', views.deal_reorder_view, name='deal_reorder'),
    path('<uuid:pk>/', views.deal_detail_view, name='deal_detail'),
    path('<uuid:pk>/edit/', views.deal_edit_view, name='deal_edit'),
    path('<uuid:pk>/delete/', views.deal_delete_view, name='deal_delete'),
    path('<uuid:pk>/contacts/', views.deal_add_contact_view, name='deal_add_contact'),
    path('<uuid:pk>/contacts/<uuid:contact_pk>/remove/', views.deal_remove_contact_view, name='deal_remove_contact'),
]
