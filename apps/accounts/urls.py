from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [

    path('login/', views.login_view, name='login'),
    path('signup/', views.signup_view, name='signup'),
    path('logout/', views.logout_view, name='logout'),
    path('forgot-password/', views.password_reset_request_view, name='password_reset'),
    path(
        'reset/<uidb64>/<token>/',
        views.password_reset_confirm_view,
        name='password_reset_confirm'
    ),
    path('settings/profile/', views.profile_view, name='profile'),
]
