# apps/board/management/commands/register_webhook.py

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from apps.board.services import get_services
from apps.core.exceptions import UpstreamError


class Command(BaseCommand):
    help = 'Registra no Trello um webhook apontando para /webhook deste relay'

    def add_arguments(self, parser):
        parser.add_argument('callback_url', help='URL pública do endpoint /webhook')
        parser.add_argument('id_model', help='ID do board (ou outro modelo) a observar')
        parser.add_argument('--description', default='Trello Relay', help='Descrição exibida no Trello')

    def handle(self, *args, **options):
        """
        Chama o Trello e mostra o ID do webhook criado
        """
        self.stdout.write(f"🪝 Registrando webhook para {options['id_model']}...")

        try:
            webhook = async_to_sync(get_services().gateway.register_webhook)(
                options['callback_url'],
                options['id_model'],
                description=options['description'],
            )
        except UpstreamError as e:
            raise CommandError(f'❌ Trello recusou o registro: {e.message}') from e

        webhook_id = webhook.get('id') if isinstance(webhook, dict) else None
        self.stdout.write(
            self.style.SUCCESS(f'✅ Webhook registrado (id={webhook_id or "?"})')
        )
