from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from apps.core.hostels.models import Hostel
from apps.core.staff.services import create_staff
from apps.core.students.services import create_student

from .models import StudentAmenity
from .services import amenities_for_occupant, create_staff_amenity, create_student_amenity, update_amenity


class AmenityServiceTests(TestCase):
    def setUp(self):
        self.hostel = Hostel.objects.create(name='Amenity Hostel')
        self.student = create_student(hostel=self.hostel, registration_number='S1', student_name='Asmita')
        self.staff = create_staff(hostel=self.hostel, employee_id='E1', staff_name='Dipak')

    def test_blank_name_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            create_student_amenity(student=self.student, name='   ')
        self.assertIn('name', ctx.exception.message_dict)

    def test_same_amenity_twice_for_one_student_is_rejected(self):
        create_student_amenity(student=self.student, name='Laundry')

        with self.assertRaises(ValidationError):
            create_student_amenity(student=self.student, name='Laundry')
        self.assertEqual(StudentAmenity.objects.filter(student=self.student).count(), 1)

    def test_amenities_follow_the_occupant_kind(self):
        create_student_amenity(student=self.student, name='Wi-Fi', description='5 GHz band')
        create_staff_amenity(staff=self.staff, name='Meals')

        self.assertEqual([a.name for a in amenities_for_occupant(self.student)], ['Wi-Fi'])
        self.assertEqual([a.name for a in amenities_for_occupant(self.staff)], ['Meals'])

    def test_update_trims_name(self):
        amenity = create_staff_amenity(staff=self.staff, name='Locker')

        amenity = update_amenity(amenity, name='  Locker 12  ')

        self.assertEqual(amenity.name, 'Locker 12')


class AmenityApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user_model = get_user_model()
        self.admin = self.user_model.objects.create_user(username='admin', password='pass12345', role='admin')
        self.hostel = Hostel.objects.create(name='Amenity API Hostel')
        self.student_user = self.user_model.objects.create_user(username='asmita', password='pass12345', role='student')
        self.student = create_student(
            hostel=self.hostel,
            registration_number='S2',
            student_name='Asmita',
            user=self.student_user,
        )

    def test_admin_grants_and_filters_student_amenities(self):
        other = create_student(hostel=self.hostel, registration_number='S3', student_name='Bipana')
        create_student_amenity(student=other, name='Gym')
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse('student-amenity-list'),
            {'student': self.student.pk, 'name': 'Study lamp'},
            format='json',
        )
        self.assertEqual(response.status_code, 201)

        response = self.client.get(reverse('student-amenity-list'), {'student': self.student.pk})

        self.assertEqual(response.status_code, 200)
        self.assertEqual([row['name'] for row in response.data['results']], ['Study lamp'])

    def test_occupant_lists_own_amenities(self):
        create_student_amenity(student=self.student, name='Wi-Fi')
        self.client.force_authenticate(self.student_user)

        response = self.client.get(reverse('my_amenities'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([row['name'] for row in response.data['results']], ['Wi-Fi'])

    def test_students_cannot_manage_amenities(self):
        self.client.force_authenticate(self.student_user)

        response = self.client.post(
            reverse('student-amenity-list'),
            {'student': self.student.pk, 'name': 'Free rent'},
            format='json',
        )

        self.assertEqual(response.status_code, 403)
