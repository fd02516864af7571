# apps/core/views.py

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

import apps
from apps.board.services import get_services


@require_GET
def health_check(request):
    """
    Health check para monitoramento
    """
    try:
        services = get_services()

        status = {
            'status': 'healthy',
            'cache': services.cache.stats(),
            'invalidation_scope': services.invalidator.scope,
            'timestamp': timezone.now().isoformat(),
            'version': apps.__version__
        }

        return JsonResponse(status)

    except Exception as e:
        status = {
            'status': 'unhealthy',
            'error': str(e),
            'timestamp': timezone.now().isoformat(),
            'version': apps.__version__
        }

        return JsonResponse(status, status=500)
