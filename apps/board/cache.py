# apps/board/cache.py

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from django.core.cache import caches
from django.utils import timezone

from apps.core.utils import gerar_fingerprint

logger = logging.getLogger(__name__)

SNAPSHOT_CACHE_ALIAS = 'snapshots'


@dataclass(frozen=True)
class CachedSnapshot:
    """
    Cópia das listas + cards de um board como vieram do Trello

    Imutável: um novo fetch gera um novo snapshot que substitui o antigo.
    """

    board_id: str
    fetched_at: datetime
    payload: Any
    fingerprint: str

    def age(self, now: datetime) -> timedelta:
        return now - self.fetched_at


class SnapshotCache:
    """
    Cache de snapshots por board com TTL e expiração preguiçosa

    Funcionalidades:
    - get/put/invalidate por board
    - Expiração verificada apenas no get (sem thread de limpeza)
    - Fingerprint calculado a partir do conteúdo no put
    - Contadores simples para o health check
    - Fetch iniciado antes de um invalidate não volta para o cache

    O armazenamento é um alias dedicado do cache do Django (LocMemCache),
    que guarda uma cópia serializada a cada set. Leitores nunca veem um
    snapshot pela metade e o último put sempre vence.
    """

    def __init__(
        self,
        ttl: timedelta,
        alias: str = SNAPSHOT_CACHE_ALIAS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._ttl = ttl
        self._backend = caches[alias]
        self._clock = clock or timezone.now

        # Contadores para o health check
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._invalidations = 0

        # Geração: incrementada a cada invalidate
        self._escrita = threading.Lock()
        self._geracao = 0

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @property
    def generation(self) -> int:
        return self._geracao

    def get(self, board_id: str) -> Optional[CachedSnapshot]:
        """
        Retorna o snapshot se ainda estiver dentro do TTL
        Snapshot expirado é removido e tratado como ausente
        """
        snapshot = self._backend.get(self._key(board_id))

        if snapshot is None:
            self._contar(misses=1)
            return None

        if snapshot.age(self._clock()) > self._ttl:
            self._backend.delete(self._key(board_id))
            self._contar(misses=1)
            logger.debug(f"⌛ Snapshot expirado removido - board {board_id}")
            return None

        self._contar(hits=1)
        return snapshot

    def put(self, board_id: str, payload: Any, generation: Optional[int] = None) -> CachedSnapshot:
        """
        Armazena o payload como novo snapshot do board
        Sobrescreve qualquer entrada anterior

        Args:
            generation: geração lida antes do fetch. Se houve invalidate
                desde então o snapshot é devolvido mas não é guardado.
        """
        snapshot = CachedSnapshot(
            board_id=board_id,
            fetched_at=self._clock(),
            payload=payload,
            fingerprint=gerar_fingerprint(payload),
        )

        with self._escrita:
            if generation is not None and generation != self._geracao:
                logger.debug(f"⏭️  Snapshot do board {board_id} descartado (cache invalidado durante o fetch)")
                return snapshot
            # o backend também expira entradas nunca relidas
            self._backend.set(self._key(board_id), snapshot, timeout=self._backend_timeout())
        return snapshot

    def invalidate(self, board_id: Optional[str] = None) -> None:
        """
        Remove o snapshot do board, ou todos quando board_id é None
        """
        with self._escrita:
            self._geracao += 1
            if board_id is None:
                self._backend.clear()
            else:
                self._backend.delete(self._key(board_id))

        if board_id is None:
            logger.info("🧹 Cache de snapshots limpo (todos os boards)")
        else:
            logger.info(f"🧹 Snapshot invalidado - board {board_id}")

        self._contar(invalidations=1)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                'ttl_ms': int(self._ttl.total_seconds() * 1000),
                'hits': self._hits,
                'misses': self._misses,
                'invalidations': self._invalidations,
            }

    def close(self) -> None:
        """Encerramento: descarta todos os snapshots"""
        self._backend.clear()

    # === Métodos auxiliares ===

    @staticmethod
    def _key(board_id: str) -> str:
        return f'board:{board_id}'

    def _backend_timeout(self) -> int:
        # Arredonda para cima; a checagem fina do TTL é feita no get
        return max(1, int(-(-self._ttl.total_seconds() // 1)))

    def _contar(self, hits=0, misses=0, invalidations=0):
        with self._lock:
            self._hits += hits
            self._misses += misses
            self._invalidations += invalidations
