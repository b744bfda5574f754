from django.core.management.base import BaseCommand
from django.db import transaction

from applications.stats import recompute_counters


class Command(BaseCommand):
    help = 'Rebuild internship, student and recruiter counters from source rows'

    def handle(self, *args, **options):
        self.stdout.write('Recomputing stats counters...')

        with transaction.atomic():
            changed = recompute_counters()

        for kind, count in changed.items():
            self.stdout.write(f'Updated {count} {kind}')
        self.stdout.write(self.style.SUCCESS('Stats counters are up to date'))
