from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from .models import AuditLog


class AuthApiTests(TestCase):
    def setUp(self):
        self.user_model = get_user_model()
        self.client = APIClient()
        self.admin = self.user_model.objects.create_user(
            username='warden',
            password='pass12345',
            role='admin',
        )

    def test_login_returns_token_and_profile(self):
        response = self.client.post(
            reverse('auth_login'),
            {'username': 'warden', 'password': 'pass12345'},
            format='json',
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['token'], Token.objects.get(user=self.admin).key)
        self.assertEqual(response.data['user']['role'], 'admin')
        self.assertTrue(AuditLog.objects.filter(action='user.login', user=self.admin).exists())

    def test_login_with_wrong_password_is_rejected(self):
        response = self.client.post(
            reverse('auth_login'),
            {'username': 'warden', 'password': 'wrong'},
            format='json',
        )

        self.assertEqual(response.status_code, 400)
        self.assertFalse(Token.objects.filter(user=self.admin).exists())

    def test_me_requires_authentication(self):
        response = self.client.get(reverse('auth_me'))
        self.assertEqual(response.status_code, 401)

    def test_token_authenticates_me_and_logout_revokes_it(self):
        token = Token.objects.create(user=self.admin)
        self.client.credentials(HTTP_AUTHORIZATION=f'Token {token.key}')

        response = self.client.get(reverse('auth_me'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['username'], 'warden')

        response = self.client.post(reverse('auth_logout'))
        self.assertEqual(response.status_code, 204)
        self.assertFalse(Token.objects.filter(user=self.admin).exists())

    def test_change_password_revokes_tokens(self):
        Token.objects.create(user=self.admin)
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse('auth_change_password'),
            {'current_password': 'pass12345', 'new_password': 'Str0nger-Passw0rd!'},
            format='json',
        )

        self.assertEqual(response.status_code, 200)
        self.admin.refresh_from_db()
        self.assertTrue(self.admin.check_password('Str0nger-Passw0rd!'))
        self.assertFalse(Token.objects.filter(user=self.admin).exists())


class RoleAccessTests(TestCase):
    def setUp(self):
        self.user_model = get_user_model()
        self.client = APIClient()

    def test_student_cannot_list_hostels(self):
        student = self.user_model.objects.create_user(username='student1', password='pass12345', role='student')
        self.client.force_authenticate(student)

        response = self.client.get(reverse('hostel-list'))
        self.assertEqual(response.status_code, 403)

    def test_admin_can_list_hostels(self):
        admin = self.user_model.objects.create_user(username='admin1', password='pass12345', role='admin')
        self.client.force_authenticate(admin)

        response = self.client.get(reverse('hostel-list'))
        self.assertEqual(response.status_code, 200)

    def test_superuser_is_always_admin(self):
        user = self.user_model.objects.create_superuser(username='root', password='pass12345')
        self.assertEqual(user.role, 'admin')
        self.assertTrue(user.is_hostel_admin)
