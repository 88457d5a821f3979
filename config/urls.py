from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from django.shortcuts import redirect

# Main URL Configuration
# Routes all requests to appropriate apps

urlpatterns = [

    path('admin/', admin.site.urls),
    path('', include('apps.accounts.urls')),
    path('dashboard/', include('apps.core.urls')),
    path('', lambda request: redirect('core:dashboard') if request.user.is_authenticated else redirect('accounts:login')),
    path('contacts/', include('apps.contacts.urls')),
    path('companies/', include('apps.companies.urls')),
    path('deals/', include('apps.deals.urls')),
    path('activities/', include('apps.activities.urls')),
    path('notes/', include('apps.notes.urls')),

]

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
