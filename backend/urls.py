"""
URL configuration for backend project.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),

    # Site and dashboard API routes
    path('api/', include('site_backend.urls')),

    # JWT auth endpoints (access in JSON + cookie, refresh via HttpOnly cookie)
    path('', include('site_backend.auth_urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.BLOB_URL_PREFIX, document_root=settings.BLOB_ROOT)
