# config/urls.py

from django.urls import path, include

urlpatterns = [
    # Monitoramento
    path('', include('apps.core.urls')),

    # API REST + webhook do Trello
    path('', include('apps.board.urls')),
]
