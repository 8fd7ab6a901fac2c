"""
Management command to recompute stale share month buckets.

The API never edits a purchase, but a purchase_date corrected directly in
the database leaves the stored `month` pointing at the old bucket. This
command moves such rows to the month of their current purchase_date.

Usage:
    python manage.py reconcile_share_months
    python manage.py reconcile_share_months --dry-run
"""

from django.core.management.base import BaseCommand
from apps.shares.services import reconcile_month_buckets
from apps.shares.periods import month_bucket


class Command(BaseCommand):
    help = 'Recompute share purchase month buckets from purchase dates'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be updated without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        stale = reconcile_month_buckets(dry_run=dry_run)

        if not stale:
            self.stdout.write(
                self.style.SUCCESS('No share purchases need reconciling. All good!')
            )
            return

        self.stdout.write(f'\nFound {len(stale)} share purchase(s) in the wrong month:\n')

        for purchase, old_month in stale:
            self.stdout.write(
                f'  - {purchase.id} | {old_month} -> {month_bucket(purchase.purchase_date)} '
                f'| Date: {purchase.purchase_date:%Y-%m-%d %H:%M} UTC'
            )

        if dry_run:
            self.stdout.write(
                self.style.WARNING('\n--dry-run mode: No changes made.')
            )
            return

        self.stdout.write(
            self.style.SUCCESS(f'\nSuccessfully reconciled {len(stale)} share purchase(s)!')
        )
