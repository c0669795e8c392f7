"""
Management command to restock one station or every station.

Usage:
    python manage.py bulk_restock --quantity 50
    python manage.py bulk_restock --quantity 50 --station 3
    python manage.py bulk_restock --quantity 50 --dry-run
"""

from django.core.management.base import BaseCommand, CommandError

from ppeman import inventory
from ppeman.conf import ppeman_settings
from ppeman.exceptions import InventoryError
from ppeman.models import InventoryRecord, Station


class Command(BaseCommand):
    """Bulk restock command."""

    help = 'Set every item of one station (or of all stations) to the given stock level'

    def add_arguments(self, parser):
        parser.add_argument(
            '--quantity',
            type=int,
            required=True,
            help='Absolute stock level to set on every item',
        )
        parser.add_argument(
            '--station',
            type=int,
            help='Restock only this station (default: all stations)',
        )
        parser.add_argument(
            '--actor',
            default=None,
            help='Actor recorded on audit entries (default: system actor)',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be restocked without changing anything',
        )

    def handle(self, *args, **options):
        quantity = options['quantity']
        station_id = options['station']
        actor = options['actor'] or ppeman_settings.SYSTEM_ACTOR

        if options['dry_run']:
            stations = Station.objects.all()
            if station_id is not None:
                stations = stations.filter(pk=station_id)
                if not stations.exists():
                    raise CommandError(f'STATION_NOT_FOUND: Station {station_id} not found')
            for station in stations:
                count = InventoryRecord.objects.at_station(station.pk).count()
                self.stdout.write(
                    f'{station.name}: {count} item(s) would be set to {quantity}'
                )
            return

        try:
            if station_id is not None:
                result = inventory.bulk_restock(station_id, quantity, actor=actor)
                self.stdout.write(self.style.SUCCESS(result.message))
                return

            report = inventory.bulk_restock_all_stations(quantity, actor=actor)
        except InventoryError as e:
            raise CommandError(f'{e.code}: {e.message}') from e

        for detail in report.details:
            if detail.success:
                self.stdout.write(f'  {detail.station_name}: {detail.message}')
            else:
                self.stderr.write(f'  {detail.station_name}: FAILED ({detail.error})')

        style = self.style.SUCCESS if not report.failed_stations else self.style.WARNING
        self.stdout.write(style(report.message))
