# apps/core/exceptions.py

"""
Exceções do Trello Relay

Hierarquia única para que o middleware consiga traduzir qualquer falha
de request em uma resposta JSON com o status correto.
"""

from typing import Optional


class RelayError(Exception):
    """Erro base do relay"""

    status_code = 500

    def __init__(self, message: str = ''):
        super().__init__(message)
        self.message = message or self.__class__.__name__

    def to_dict(self):
        return {'error': self.message}


class InvalidRequest(RelayError):
    """Corpo de request ilegível ou sem os campos obrigatórios"""

    status_code = 400


class UpstreamError(RelayError):
    """
    Trello respondeu com status fora da faixa 2xx

    Guarda o status original para logs e para o corpo da resposta.
    """

    status_code = 502

    def __init__(self, message: str = '', upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status

    def to_dict(self):
        data = super().to_dict()
        if self.upstream_status is not None:
            data['upstream_status'] = self.upstream_status
        return data


class UpstreamUnavailable(UpstreamError):
    """Falha de rede/transporte ao falar com o Trello"""
