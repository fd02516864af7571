# apps/board/normalizer.py

"""
Normalização de webhooks do Trello

Transforma a "action" opaca enviada pelo Trello em um CanonicalEvent com
taxonomia estável. A função é pura e nunca levanta exceção: qualquer
payload fora do formato esperado vira um evento UNKNOWN.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from apps.core.utils import primeiro_presente

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    CARD_CREATED = 'cardCreated'
    CARD_UPDATED = 'cardUpdated'
    CARD_MOVED = 'cardMoved'
    CARD_ARCHIVED = 'cardArchived'
    CARD_DELETED = 'cardDeleted'
    UNKNOWN = 'unknown'


# Tipos de evento no formato já consumido pelo frontend
MOVE_CARD = 'moveCard'
ARCHIVE_CARD = 'archiveCard'
UPDATE_CARD_DETAILS = 'updateCardDetails'
DELETE_CARD = 'deleteCard'
UNKNOWN_EVENT = 'unknown'

# Tipos crus do Trello que repassamos sem reclassificar
_PASSTHROUGH_KINDS = {
    'createCard': EventKind.CARD_CREATED,
    'updateCard': EventKind.CARD_UPDATED,
}


@dataclass(frozen=True)
class CardProjection:
    id: Optional[str]
    name: Optional[str] = None
    description: Optional[str] = None
    list_id: Optional[str] = None
    archived: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        campos = {
            'id': self.id,
            'name': self.name,
            'desc': self.description,
            'idList': self.list_id,
            'closed': self.archived,
        }
        return {chave: valor for chave, valor in campos.items() if valor is not None}


@dataclass(frozen=True)
class CanonicalEvent:
    kind: EventKind
    event_type: str
    board_id: Optional[str] = None
    list_id: Optional[str] = None
    card: Optional[CardProjection] = None

    def to_dict(self) -> Dict[str, Any]:
        """Mensagem enviada no canal trelloEvent"""
        return {
            'kind': self.kind.value,
            'eventType': self.event_type,
            'boardId': self.board_id,
            'listId': self.list_id,
            'card': self.card.to_dict() if self.card else None,
        }


UNKNOWN = CanonicalEvent(kind=EventKind.UNKNOWN, event_type=UNKNOWN_EVENT)


def normalize_action(raw: Any) -> CanonicalEvent:
    """
    Normaliza uma action de webhook do Trello

    Args:
        raw: objeto "action" do corpo do webhook ({type, data})

    Returns:
        CanonicalEvent (UNKNOWN quando a estrutura não é reconhecida)
    """
    try:
        return _normalizar(raw)
    except Exception:
        logger.exception("❌ Erro inesperado ao normalizar webhook do Trello")
        return UNKNOWN


def _normalizar(raw: Any) -> CanonicalEvent:
    if not isinstance(raw, Mapping):
        return UNKNOWN

    action_type = raw.get('type')
    data = raw.get('data')
    if not isinstance(action_type, str) or not isinstance(data, Mapping):
        return UNKNOWN

    card = data.get('card')
    if not isinstance(card, Mapping):
        return UNKNOWN

    kind, event_type = _classificar(action_type, data, card)

    return CanonicalEvent(
        kind=kind,
        event_type=event_type,
        board_id=_board_id(data, card),
        list_id=_list_id(data, card),
        card=_projetar_card(card),
    )


def _classificar(action_type: str, data: Mapping, card: Mapping):
    """
    Decide o tipo canônico; a primeira regra que casar vence
    """
    if action_type == DELETE_CARD:
        return EventKind.CARD_DELETED, DELETE_CARD

    if action_type == 'updateCard':
        old = _mapa(data.get('old'))
        list_after = _mapa(data.get('listAfter'))

        lista_anterior = primeiro_presente([old.get('idList')])
        lista_nova = primeiro_presente([list_after.get('id')])
        if lista_anterior and lista_nova and lista_anterior != lista_nova:
            return EventKind.CARD_MOVED, MOVE_CARD

        if old.get('closed') is False and card.get('closed') is True:
            return EventKind.CARD_ARCHIVED, ARCHIVE_CARD

        if old.get('name') or old.get('desc'):
            return EventKind.CARD_UPDATED, UPDATE_CARD_DETAILS

    return _PASSTHROUGH_KINDS.get(action_type, EventKind.UNKNOWN), action_type


def _board_id(data: Mapping, card: Mapping) -> Optional[str]:
    return primeiro_presente([
        _mapa(data.get('board')).get('id'),
        card.get('idBoard'),
        _mapa(data.get('list')).get('idBoard'),
    ])


def _list_id(data: Mapping, card: Mapping) -> Optional[str]:
    return primeiro_presente([
        _mapa(data.get('list')).get('id'),
        _mapa(data.get('listAfter')).get('id'),
        card.get('idList'),
    ])


def _projetar_card(card: Mapping) -> CardProjection:
    closed = card.get('closed')
    return CardProjection(
        id=_texto(card.get('id')),
        name=_texto(card.get('name')),
        description=_texto(card.get('desc')),
        list_id=_texto(card.get('idList')),
        # Só repassamos closed quando for booleano de verdade
        archived=closed if isinstance(closed, bool) else None,
    )


def _mapa(valor: Any) -> Mapping:
    return valor if isinstance(valor, Mapping) else {}


def _texto(valor: Any) -> Optional[str]:
    return valor if isinstance(valor, str) else None
