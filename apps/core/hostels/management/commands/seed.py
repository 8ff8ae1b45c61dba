import random
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from faker import Faker

from apps.core.attendance.services import create_checkout_rule
from apps.core.finance.services import create_student_financial
from apps.core.hostels.models import Hostel
from apps.core.hostels.services import available_rooms, create_block, create_room
from apps.core.staff.services import create_staff
from apps.core.students.services import create_student
from apps.core.users.models import User


class Command(BaseCommand):
    help = 'Seeds the database with a demo hostel.'

    def add_arguments(self, parser):
        parser.add_argument('--blocks', type=int, default=2)
        parser.add_argument('--rooms-per-block', type=int, default=5)
        parser.add_argument('--students', type=int, default=15)
        parser.add_argument('--staff', type=int, default=4)

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write('Seeding database...')
        fake = Faker()

        if not User.objects.filter(username='admin').exists():
            User.objects.create_superuser('admin', 'admin@example.com', 'password')
            self.stdout.write(self.style.SUCCESS('Created admin user.'))

        hostel, created = Hostel.objects.get_or_create(
            name='Demo Hostel',
            defaults={
                'address': fake.address(),
                'contact_number': fake.numerify('98########'),
                'email': fake.email(),
            },
        )
        if not created:
            self.stdout.write(self.style.WARNING('Demo Hostel already exists, nothing to do.'))
            return

        for block_index in range(options['blocks']):
            block = create_block(hostel=hostel, block_name=f'Block {chr(65 + block_index)}')
            for room_index in range(1, options['rooms_per_block'] + 1):
                create_room(
                    block=block,
                    room_number=f'{chr(65 + block_index)}{room_index:02d}',
                    capacity=random.choice([1, 2, 3]),
                    floor_number=(room_index - 1) // 3,
                )
            self.stdout.write(self.style.SUCCESS(f'Created {block.block_name} with {options["rooms_per_block"]} rooms'))

        for number in range(1, options['students'] + 1):
            room = available_rooms(hostel=hostel).first()
            student = create_student(
                hostel=hostel,
                registration_number=f'REG{number:04d}',
                student_name=fake.name(),
                date_of_birth=fake.date_of_birth(minimum_age=17, maximum_age=25),
                contact_number=fake.numerify('98########'),
                guardian_name=fake.name(),
                guardian_contact=fake.numerify('98########'),
                room=room,
            )
            create_student_financial(
                student=student,
                monthly_fee=Decimal(random.choice([6000, 7500, 9000])),
                admission_fee=Decimal('2000.00'),
                initial_balance=Decimal(random.choice([0, 5000, 12000])),
            )
            create_checkout_rule(student=student, active_after_days=3, percentage=Decimal('10'))
            create_checkout_rule(student=student, active_after_days=7, percentage=Decimal('25'))
        self.stdout.write(self.style.SUCCESS(f'Created {options["students"]} students'))

        for number in range(1, options['staff'] + 1):
            create_staff(
                hostel=hostel,
                employee_id=f'EMP{number:03d}',
                staff_name=fake.name(),
                position=random.choice(['Warden', 'Cook', 'Cleaner', 'Security']),
                contact_number=fake.numerify('98########'),
                salary_amount=Decimal(random.choice([15000, 18000, 25000])),
            )
        self.stdout.write(self.style.SUCCESS(f'Created {options["staff"]} staff members'))

        self.stdout.write(self.style.SUCCESS('Database seeding complete!'))
