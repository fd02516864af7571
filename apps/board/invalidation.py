# apps/board/invalidation.py

import logging
from typing import Optional

from .cache import SnapshotCache
from .normalizer import CanonicalEvent

logger = logging.getLogger(__name__)

SCOPE_ALL = 'all'
SCOPE_BOARD = 'board'


class CacheInvalidator:
    """
    Decide quais snapshots descartar após mutações e webhooks

    Política padrão (SCOPE_ALL): limpa o cache inteiro sempre. Nem toda
    resposta do Trello traz o board afetado, então preferimos dados
    frescos a taxa de acerto.

    SCOPE_BOARD descarta só o board conhecido e cai para limpeza total
    quando o id não vem no resultado.
    """

    def __init__(self, cache: SnapshotCache, scope: str = SCOPE_ALL):
        if scope not in (SCOPE_ALL, SCOPE_BOARD):
            raise ValueError(f"Escopo de invalidação inválido: {scope}")
        self._cache = cache
        self._scope = scope

    @property
    def scope(self) -> str:
        return self._scope

    def on_mutation_success(self, board_id: Optional[str] = None) -> None:
        """Chamado pelo gateway depois de uma escrita bem sucedida"""
        self._invalidar(board_id, origem='mutação')

    def on_external_notification(self, event: Optional[CanonicalEvent] = None) -> None:
        """Chamado para cada webhook recebido do Trello"""
        self._invalidar(event.board_id if event else None, origem='webhook')

    def _invalidar(self, board_id: Optional[str], origem: str) -> None:
        if self._scope == SCOPE_BOARD and board_id:
            logger.debug(f"🔄 Invalidação por {origem} - board {board_id}")
            self._cache.invalidate(board_id)
            return

        logger.debug(f"🔄 Invalidação por {origem} - cache inteiro")
        self._cache.invalidate()
