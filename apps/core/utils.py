# apps/core/utils.py

import hashlib
import json
from datetime import datetime
from typing import Any, Iterable, List, Optional

from django.utils.http import parse_http_date_safe, parse_etags


def gerar_fingerprint(payload: Any) -> str:
    """
    Gera um hash determinístico do conteúdo JSON

    Chaves ordenadas e separadores compactos: o mesmo conteúdo sempre
    produz o mesmo fingerprint, independente da ordem de inserção.
    """
    conteudo = json.dumps(
        payload,
        sort_keys=True,
        separators=(',', ':'),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(conteudo.encode('utf-8')).hexdigest()


def formatar_etag(fingerprint: str) -> str:
    """Ex: abc123 -> "abc123" (ETag forte)"""
    return f'"{fingerprint}"'


def extrair_etags(header: Optional[str]) -> List[str]:
    """
    Lê um If-None-Match e devolve os valores sem aspas
    Aceita "*" e ETags fracas (W/"...")
    """
    if not header:
        return []
    return [etag.removeprefix('W/').strip('"') for etag in parse_etags(header)]


def timestamp_http(header: Optional[str]) -> Optional[int]:
    """If-Modified-Since -> epoch em segundos (None se inválido)"""
    if not header:
        return None
    return parse_http_date_safe(header)


def epoch_segundos(momento: datetime) -> int:
    return int(momento.timestamp())


def primeiro_presente(valores: Iterable[Any]) -> Optional[str]:
    """Primeiro valor que seja string não vazia"""
    for valor in valores:
        if isinstance(valor, str) and valor:
            return valor
    return None
