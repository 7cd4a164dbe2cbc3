from django.core.management.base import BaseCommand, CommandError

from countries.exceptions import RefreshInProgress, UpstreamUnavailable
from countries.refresh import do_refresh
from countries.repository import CountryRepository


class Command(BaseCommand):
    help = 'Refresh countries from external APIs'

    def add_arguments(self, parser):
        parser.add_argument('--database', default='default', help='Database alias to write to.')

    def handle(self, *args, **options):
        try:
            result = do_refresh(repository=CountryRepository(using=options['database']))
        except UpstreamUnavailable as exc:
            raise CommandError(f"{exc.detail}: {exc.details}")
        except RefreshInProgress as exc:
            raise CommandError(str(exc.detail))

        self.stdout.write(self.style.SUCCESS(
            f"{result['message']} ({result['total_countries']} countries at {result['timestamp']})"
        ))
