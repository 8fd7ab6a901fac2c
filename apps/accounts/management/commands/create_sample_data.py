"""
Management command to create sample data for testing the API.

Usage:
    python manage.py create_sample_data
    python manage.py create_sample_data --clear

This creates:
- 1 admin (admin@example.com)
- 4 members (alice, bob, charlie, diana)
- Share purchases spread over the last 6 months, recorded by the admin
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from decimal import Decimal
from datetime import timedelta
import random

from apps.accounts.models import User, Role
from apps.shares.models import SharePurchase, PaymentMethod
from apps.shares.services import record_purchase


MEMBERS = [
    ('alice@example.com', 'Alice Mensah'),
    ('bob@example.com', 'Bob Owusu'),
    ('charlie@example.com', 'Charlie Boateng'),
    ('diana@example.com', 'Diana Asante'),
]

SHARE_PRICE = Decimal('10.00')


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        admin, members = self.create_users()
        count = self.create_purchases(admin, members)

        self.stdout.write(self.style.SUCCESS(f'Sample data created successfully! ({count} purchases)'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (admin)')
        for email, _ in MEMBERS:
            self.stdout.write(f'  {email} / password123 (member)')

    def clear_data(self):
        """Clear sample purchases and users."""
        emails = [email for email, _ in MEMBERS] + ['admin@example.com']
        SharePurchase.objects.filter(user__email__in=emails).delete()
        User.objects.filter(email__in=emails, is_superuser=False).delete()
        User.objects.filter(email='admin@example.com').delete()

    def create_users(self):
        """Create the admin and member accounts."""
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'name': 'Admin User',
                'role': Role.ADMIN,
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        members = []
        for email, name in MEMBERS:
            member, _ = User.objects.get_or_create(
                email=email,
                defaults={'name': name, 'role': Role.MEMBER}
            )
            member.set_password('password123')
            member.save()
            members.append(member)

        return admin, members

    def create_purchases(self, admin, members):
        """Record purchases through the ledger writer so month and totals are derived."""
        self.stdout.write('  Creating share purchases...')

        rng = random.Random(42)
        now = timezone.now()
        count = 0

        for member in members:
            for _ in range(rng.randint(2, 6)):
                record_purchase(
                    user_id=member.id,
                    quantity=rng.randint(1, 20),
                    price_per_share=SHARE_PRICE,
                    payment_method=rng.choice(PaymentMethod.values),
                    purchase_date=now - timedelta(days=rng.randint(0, 180)),
                    recorded_by=admin,
                    notes='Sample purchase',
                )
                count += 1

        return count
