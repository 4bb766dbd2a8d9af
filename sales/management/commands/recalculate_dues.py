from django.core.management.base import BaseCommand, CommandError
from core.utils import parse_date_key
from salesmen.models import Salesman
from sales.models import RecalculationStatus
from sales.services import request_recalculation, retry_failed_recalculations
import logging

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Recalculate salesman due balances after a date, or retry failed recalculations'

    def add_arguments(self, parser):
        parser.add_argument(
            '--salesman',
            type=int,
            help='Salesman id to recalculate',
        )
        parser.add_argument(
            '--date',
            type=str,
            help='Anchor date (YYYY-MM-DD); records strictly after it are rewritten',
        )
        parser.add_argument(
            '--retry-failed',
            action='store_true',
            help='Re-run every recalculation left pending, failed or partial',
        )

    def handle(self, *args, **options):
        if options['retry_failed']:
            tasks = retry_failed_recalculations()
            if not tasks:
                self.stdout.write('Nothing to retry.')
            for task in tasks:
                self.report(task)
            failed = [task for task in tasks if task.status != RecalculationStatus.SUCCEEDED]
            if failed:
                raise CommandError(f'{len(failed)} recalculation(s) still failing')
            return

        if options['salesman'] is None or not options['date']:
            raise CommandError('Pass --salesman and --date, or --retry-failed')
        day = parse_date_key(options['date'])
        if day is None:
            raise CommandError(f"Invalid date: {options['date']}")
        try:
            salesman = Salesman.objects.get(pk=options['salesman'])
        except Salesman.DoesNotExist:
            raise CommandError(f"Salesman {options['salesman']} does not exist")

        task = request_recalculation(salesman, day)
        self.report(task)
        if task.status != RecalculationStatus.SUCCEEDED:
            raise CommandError(task.error_message or task.status)

    def report(self, task):
        line = (
            f'{task.salesman_id} after {task.anchor_date}: {task.status} '
            f'({task.records_updated}/{task.records_total} records)'
        )
        if task.status == RecalculationStatus.SUCCEEDED:
            self.stdout.write(self.style.SUCCESS(line))
        else:
            logger.error(f'Recalculation {task.pk} not completed: {task.error_message}')
            self.stdout.write(self.style.ERROR(line))
