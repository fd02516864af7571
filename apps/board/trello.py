# apps/board/trello.py

import logging
from typing import Any, Dict, Optional

import httpx

from apps.core.exceptions import UpstreamError, UpstreamUnavailable

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://api.trello.com/1'


class TrelloClient:
    """
    Cliente HTTP assíncrono da API REST do Trello

    Cada chamada abre um httpx.AsyncClient próprio. Qualquer resposta
    fora de 2xx vira UpstreamError; falhas de rede viram UpstreamUnavailable.
    """

    def __init__(
        self,
        api_key: str,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._auth = {'key': api_key, 'token': api_token}
        self._base_url = base_url.rstrip('/')
        self._timeout = timeout
        self._transport = transport

    # === Cards ===

    async def create_card(self, list_id: str, name: Optional[str], desc: Optional[str]) -> Any:
        return await self._request('POST', '/cards', {
            'idList': list_id,
            'name': name,
            'desc': desc,
        })

    async def update_card(self, card_id: str, fields: Dict[str, Any]) -> Any:
        return await self._request('PUT', f'/cards/{card_id}', fields)

    # === Boards ===

    async def create_board(self, name: str, default_lists: bool = True) -> Any:
        return await self._request('POST', '/boards/', {
            'name': name,
            'defaultLists': default_lists,
        })

    async def get_board_lists(self, board_id: str) -> Any:
        """Listas abertas do board com seus cards (nome, descrição, lista)"""
        return await self._request('GET', f'/boards/{board_id}/lists', {
            'cards': 'open',
            'card_fields': 'name,desc,idList',
            'fields': 'name',
        })

    # === Webhooks ===

    async def create_webhook(self, callback_url: str, id_model: str, description: Optional[str] = None) -> Any:
        return await self._request('POST', '/webhooks', {
            'callbackURL': callback_url,
            'idModel': id_model,
            'description': description,
        })

    # === Métodos auxiliares ===

    async def _request(self, method: str, path: str, params: Dict[str, Any]) -> Any:
        """
        Executa a chamada e devolve o JSON da resposta

        Parâmetros None são omitidos; o Trello recebe tudo via query string.
        """
        query = {chave: self._formatar(valor) for chave, valor in params.items() if valor is not None}
        query.update(self._auth)

        client_kwargs = {'base_url': self._base_url}
        if self._timeout is not None:
            client_kwargs['timeout'] = self._timeout
        if self._transport is not None:
            client_kwargs['transport'] = self._transport

        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.request(method, path, params=query)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = e.response.text.strip() or e.response.reason_phrase
            logger.warning(f"⚠️  Trello {method} {path} -> {e.response.status_code}: {message}")
            # 5xx: o Trello está fora; 4xx: a chamada foi recusada
            error_class = UpstreamUnavailable if e.response.status_code >= 500 else UpstreamError
            raise error_class(message, upstream_status=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"❌ Trello indisponível em {method} {path}: {e}")
            raise UpstreamUnavailable(str(e) or e.__class__.__name__) from e

        logger.debug(f"✅ Trello {method} {path} -> {response.status_code}")

        try:
            return response.json()
        except ValueError:
            return {'raw_response': response.text}

    @staticmethod
    def _formatar(valor: Any) -> Any:
        if isinstance(valor, bool):
            return 'true' if valor else 'false'
        return valor
