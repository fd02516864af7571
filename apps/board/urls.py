# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

urlpatterns = [
    # Tarefas (cards do Trello)
    path('api/tasks', views.criar_tarefa, name='criar_tarefa'),
    path('api/tasks/<str:card_id>', views.tarefa_detalhe, name='tarefa_detalhe'),

    # Boards
    path('api/boards', views.criar_board, name='criar_board'),
    path('api/boards/<str:board_id>/lists', views.listar_listas, name='listar_listas'),

    # Webhooks do Trello
    path('webhook', views.webhook_trello, name='webhook'),
    path('api/webhooks', views.registrar_webhook, name='registrar_webhook'),
]
