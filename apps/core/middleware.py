# apps/core/middleware.py

import logging

from django.http import JsonResponse

from .exceptions import RelayError, UpstreamError

logger = logging.getLogger(__name__)


class RelayErrorMiddleware:
    """
    Middleware que converte erros do relay em respostas JSON

    As views apenas levantam a exceção; aqui decidimos o status HTTP
    e registramos o problema. Nada de cache invalidado ou broadcast
    acontece quando chegamos aqui, pois o gateway só faz isso em sucesso.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        """
        Traduz RelayError -> JsonResponse
        Outras exceções seguem o fluxo padrão do Django
        """
        if not isinstance(exception, RelayError):
            return None

        if isinstance(exception, UpstreamError):
            logger.error(
                f"❌ Falha no Trello em {request.method} {request.path}: "
                f"{exception.message} (status={exception.upstream_status})"
            )
        else:
            logger.warning(f"⚠️  Request inválido em {request.method} {request.path}: {exception.message}")

        return JsonResponse(exception.to_dict(), status=exception.status_code)
