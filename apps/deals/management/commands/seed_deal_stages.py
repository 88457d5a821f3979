from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from apps.deals.models import DealStage


class Command(BaseCommand):
    help = 'Create the default deal stages for users that have none'

    def add_arguments(self, parser):
        parser.add_argument('--email', help='Only seed stages for this user')

    def handle(self, *args, **options):
        User = get_user_model()
        users = User.objects.all()

        if options['email']:
            users = users.filter(email__iexact=options['email'])
            if not users.exists():
                raise CommandError(f"No user with email {options['email']}")

        seeded = 0
        for user in users:
            if DealStage.objects.seed_defaults(user):
                seeded += 1
                self.stdout.write(f'  Seeded stages for {user.email}')

        self.stdout.write(self.style.SUCCESS(f'Done. {seeded} user(s) seeded.'))
