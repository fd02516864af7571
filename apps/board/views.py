# apps/board/views.py

import json
import logging

from django.http import HttpResponse, HttpResponseNotModified, JsonResponse
from django.utils.http import http_date
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.core.exceptions import InvalidRequest
from apps.core.utils import epoch_segundos, extrair_etags, formatar_etag, timestamp_http

from . import broadcast as canais
from .gateway import is_not_modified
from .normalizer import normalize_action
from .services import get_services

logger = logging.getLogger(__name__)


# === TAREFAS (cards) ===

@csrf_exempt
@require_POST
async def criar_tarefa(request):
    """
    Cria um card no Trello
    Body: {listId, name, desc}
    """
    data = _ler_json(request)
    list_id = data.get('listId')
    if not list_id:
        raise InvalidRequest('listId é obrigatório')

    card = await get_services().gateway.create_card(
        list_id,
        name=data.get('name'),
        desc=data.get('desc'),
    )
    return JsonResponse(card, safe=False)


@csrf_exempt
@require_http_methods(["PUT", "DELETE"])
async def tarefa_detalhe(request, card_id):
    """
    PUT: atualiza nome/descrição/lista/arquivado do card
    DELETE: arquiva o card (o Trello não apaga de fato)
    """
    gateway = get_services().gateway

    if request.method == 'DELETE':
        resultado = await gateway.archive_card(card_id)
        return JsonResponse(resultado)

    data = _ler_json(request)
    closed = data.get('closed')
    if closed is not None and not isinstance(closed, bool):
        raise InvalidRequest('closed deve ser booleano')

    card = await gateway.update_card(
        card_id,
        name=data.get('name'),
        desc=data.get('desc'),
        list_id=data.get('idList'),
        closed=closed,
    )
    return JsonResponse(card, safe=False)


# === BOARDS ===

@csrf_exempt
@require_POST
async def criar_board(request):
    """
    Cria um board no Trello
    Body: {name, defaultLists}
    """
    data = _ler_json(request)
    name = data.get('name')
    if not name:
        raise InvalidRequest('name é obrigatório')

    default_lists = data.get('defaultLists', True)
    if not isinstance(default_lists, bool):
        raise InvalidRequest('defaultLists deve ser booleano')

    board = await get_services().gateway.create_board(name, default_lists=default_lists)
    return JsonResponse(board, safe=False)


@require_GET
async def listar_listas(request, board_id):
    """
    Listas + cards do board (cache com TTL)

    Headers de resposta para revalidação condicional:
    - ETag: fingerprint do conteúdo
    - Last-Modified / X-Fetched-At: momento do fetch no Trello
    - X-Cache: HIT ou MISS

    Responde 304 quando If-None-Match casa com o fingerprint atual ou
    quando If-Modified-Since é pelo menos tão recente quanto o snapshot.
    """
    snapshot, cache_hit = await get_services().gateway.fetch_lists(board_id)

    nao_modificado = is_not_modified(
        snapshot,
        etags=extrair_etags(request.headers.get('If-None-Match')),
        since=timestamp_http(request.headers.get('If-Modified-Since')),
    )

    if nao_modificado:
        response = HttpResponseNotModified()
    else:
        response = JsonResponse(snapshot.payload, safe=False)

    response['ETag'] = formatar_etag(snapshot.fingerprint)
    response['Last-Modified'] = http_date(epoch_segundos(snapshot.fetched_at))
    response['X-Fetched-At'] = snapshot.fetched_at.isoformat()
    response['X-Cache'] = 'HIT' if cache_hit else 'MISS'
    return response


# === WEBHOOKS ===

@csrf_exempt
@require_http_methods(["HEAD", "GET", "POST"])
async def webhook_trello(request):
    """
    Endpoint chamado pelo Trello

    HEAD/GET: verificação do Trello ao registrar o webhook
    POST: evento; sempre responde 200, mesmo se o processamento falhar
    """
    if request.method != 'POST':
        return HttpResponse('OK')

    try:
        await _processar_webhook(request.body)
    except Exception:
        logger.exception("❌ Erro ao processar webhook do Trello")

    return HttpResponse('OK')


@csrf_exempt
@require_POST
async def registrar_webhook(request):
    """
    Registra um webhook no Trello
    Body: {callbackURL, idModel, description}
    """
    data = _ler_json(request)
    callback_url = data.get('callbackURL')
    id_model = data.get('idModel')
    if not callback_url or not id_model:
        raise InvalidRequest('callbackURL e idModel são obrigatórios')

    webhook = await get_services().gateway.register_webhook(
        callback_url,
        id_model,
        description=data.get('description'),
    )
    return JsonResponse(webhook, safe=False)


# === Métodos auxiliares ===

async def _processar_webhook(body: bytes):
    """
    Normaliza, invalida o cache e publica o evento cru e o canônico
    """
    services = get_services()

    try:
        payload = json.loads(body) if body else None
    except ValueError:
        payload = body.decode('utf-8', errors='replace')

    action = payload.get('action') if isinstance(payload, dict) else None
    event = normalize_action(action)

    services.invalidator.on_external_notification(event)

    await services.broadcaster.broadcast(canais.WEBHOOK_EVENT, payload)
    await services.broadcaster.broadcast(canais.TRELLO_EVENT, event.to_dict())

    logger.info(f"🪝 Webhook recebido - {event.event_type} (board={event.board_id})")


def _ler_json(request) -> dict:
    """Corpo JSON do request; vazio vira {}"""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except ValueError:
        raise InvalidRequest('JSON inválido')
    if not isinstance(data, dict):
        raise InvalidRequest('O corpo deve ser um objeto JSON')
    return data
