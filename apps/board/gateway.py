# apps/board/gateway.py

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from apps.core.exceptions import UpstreamError

from . import broadcast as canais
from .broadcast import EventBroadcaster
from .cache import CachedSnapshot, SnapshotCache
from .invalidation import CacheInvalidator
from .trello import TrelloClient

logger = logging.getLogger(__name__)


class MutationGateway:
    """
    Ponto único de acesso ao Trello para as views

    Cada operação faz exatamente uma chamada ao Trello. Em caso de sucesso:
    1. Invalida o cache (CacheInvalidator)
    2. Publica o evento da operação (EventBroadcaster)

    Em caso de falha a exceção sobe para a view sem tocar no cache e sem
    broadcast.
    """

    def __init__(
        self,
        client: TrelloClient,
        cache: SnapshotCache,
        invalidator: CacheInvalidator,
        broadcaster: EventBroadcaster,
    ):
        self.client = client
        self.cache = cache
        self.invalidator = invalidator
        self.broadcaster = broadcaster

    # === Escritas ===

    async def create_card(self, list_id: str, name: Optional[str] = None, desc: Optional[str] = None) -> Any:
        card = await self.client.create_card(list_id, name, desc)
        await self._concluir_mutacao(canais.TASK_CREATED, card, board_id=_id_board(card))
        logger.info(f"🆕 Card criado na lista {list_id}")
        return card

    async def update_card(
        self,
        card_id: str,
        name: Optional[str] = None,
        desc: Optional[str] = None,
        list_id: Optional[str] = None,
        closed: Optional[bool] = None,
    ) -> Any:
        """
        Atualiza apenas os campos informados (None = não alterar)
        """
        fields = {
            'name': name,
            'desc': desc,
            'idList': list_id,
            'closed': closed,
        }
        fields = {chave: valor for chave, valor in fields.items() if valor is not None}

        card = await self.client.update_card(card_id, fields)
        await self._concluir_mutacao(canais.TASK_UPDATED, card, board_id=_id_board(card))
        logger.info(f"✏️  Card {card_id} atualizado ({', '.join(sorted(fields)) or 'sem campos'})")
        return card

    async def archive_card(self, card_id: str) -> Dict[str, Any]:
        """
        Arquiva o card (closed=true); o Trello não apaga de fato
        """
        card = await self.client.update_card(card_id, {'closed': True})
        await self._concluir_mutacao(canais.TASK_DELETED, {'cardId': card_id}, board_id=_id_board(card))
        logger.info(f"🗄️  Card {card_id} arquivado")
        return {'message': 'Card archived', 'cardId': card_id, 'data': card}

    async def create_board(self, name: str, default_lists: bool = True) -> Any:
        board = await self.client.create_board(name, default_lists)
        board_id = board.get('id') if isinstance(board, dict) else None
        await self._concluir_mutacao(canais.BOARD_CREATED, board, board_id=board_id)
        logger.info(f"📋 Board '{name}' criado")
        return board

    async def register_webhook(self, callback_url: str, id_model: str, description: Optional[str] = None) -> Any:
        """Registra o webhook no Trello; não altera cache nem publica evento"""
        webhook = await self.client.create_webhook(callback_url, id_model, description)
        logger.info(f"🪝 Webhook registrado para {id_model} -> {callback_url}")
        return webhook

    # === Leitura ===

    async def fetch_lists(self, board_id: str) -> Tuple[CachedSnapshot, bool]:
        """
        Listas + cards do board, servidas do cache quando frescas

        Returns:
            Tuple[snapshot, veio_do_cache]
        """
        snapshot = self.cache.get(board_id)
        if snapshot is not None:
            return snapshot, True

        geracao = self.cache.generation
        payload = await self.client.get_board_lists(board_id)
        snapshot = self.cache.put(board_id, payload, generation=geracao)
        logger.debug(f"📥 Snapshot do board {board_id} atualizado ({snapshot.fingerprint[:12]})")
        return snapshot, False

    async def warm(self, board_ids: Iterable[str]) -> List[str]:
        """
        Pré-carrega snapshots; falhas são registradas e ignoradas

        Returns:
            Lista de boards carregados com sucesso
        """
        carregados = []
        for board_id in board_ids:
            try:
                await self.fetch_lists(board_id)
            except UpstreamError as e:
                logger.warning(f"⚠️  Não foi possível aquecer o board {board_id}: {e.message}")
                continue
            carregados.append(board_id)

        if carregados:
            logger.info(f"🔥 Cache aquecido para {len(carregados)} board(s)")
        return carregados

    # === Métodos auxiliares ===

    async def _concluir_mutacao(self, channel: str, payload: Any, board_id: Optional[str] = None) -> None:
        # invalidar antes do broadcast
        self.invalidator.on_mutation_success(board_id)
        await self.broadcaster.broadcast(channel, payload)


def is_not_modified(
    snapshot: CachedSnapshot,
    etags: Iterable[str] = (),
    since: Optional[int] = None,
) -> bool:
    """
    Verifica se o chamador já tem o snapshot atual

    Args:
        snapshot: snapshot que seria servido
        etags: fingerprints que o chamador já possui ("*" casa com qualquer um)
        since: epoch (segundos) do último fetch conhecido pelo chamador

    O since é comparado com o instante exato do fetch: um snapshot buscado
    depois, no mesmo segundo, ainda conta como mais novo.
    """
    for etag in etags:
        if etag == '*' or etag == snapshot.fingerprint:
            return True

    if since is not None and since >= snapshot.fetched_at.timestamp():
        return True

    return False


def _id_board(resultado: Any) -> Optional[str]:
    if isinstance(resultado, dict):
        board_id = resultado.get('idBoard')
        if isinstance(board_id, str) and board_id:
            return board_id
    return None
