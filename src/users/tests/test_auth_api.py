# Auth API:
#   POST /api/auth/register/  -> 201 + access/refresh httpOnly cookies
#   POST /api/auth/login/     -> 200 + cookies, 401 on bad credentials
#   GET|PATCH /api/auth/me/   -> own profile, moderation flags read-only
#   POST /api/auth/logout/    -> cookies cleared

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework.test import APITestCase

from src.banners.factories import UserFactory

User = get_user_model()

PASSWORD = "Banner-Slot-2030"


class RegisterApiTests(APITestCase):
    def test_register_sets_cookies(self):
        res = self.client.post(
            reverse("users:register"),
            {"email": "new.member@example.com", "password": PASSWORD},
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["user"]["username"], "new.member")
        self.assertFalse(res.data["user"]["is_suspended"])
        self.assertIn("access_token", res.cookies)
        self.assertIn("refresh_token", res.cookies)
        self.assertTrue(res.cookies["access_token"]["httponly"])
        self.assertTrue(User.objects.filter(email="new.member@example.com").exists())

    def test_register_rejects_weak_password(self):
        res = self.client.post(
            reverse("users:register"),
            {"email": "weak@example.com", "password": "123"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("password", res.data)

    def test_register_duplicate_email(self):
        UserFactory(email="taken@example.com")
        res = self.client.post(
            reverse("users:register"),
            {"email": "taken@example.com", "password": PASSWORD},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("email", res.data)


class LoginApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = UserFactory(email="login@example.com", password=PASSWORD)

    def test_login_success_and_cookie_auth(self):
        res = self.client.post(
            reverse("users:login"), {"email": "login@example.com", "password": PASSWORD}, format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertIn("access_token", res.cookies)

        # the cookie alone authenticates the next request
        me = self.client.get(reverse("users:me"))
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.data["email"], "login@example.com")

    def test_login_bad_password(self):
        res = self.client.post(
            reverse("users:login"), {"email": "login@example.com", "password": "wrong"}, format="json",
        )
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["detail"], "Invalid credentials")
        self.assertNotIn("access_token", res.cookies)

    def test_token_pair_endpoint(self):
        res = self.client.post(
            reverse("token_obtain_pair"), {"email": "login@example.com", "password": PASSWORD}, format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertIn("access", res.data)
        self.assertIn("refresh", res.data)

        me = self.client.get(reverse("users:me"), HTTP_AUTHORIZATION=f"Bearer {res.data['access']}")
        self.assertEqual(me.status_code, 200)


class MeApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = UserFactory(username="oldname")

    def setUp(self):
        self.client.force_authenticate(self.user)

    def test_patch_profile(self):
        res = self.client.patch(
            reverse("users:me"),
            {"username": "newname", "avatar_url": "https://cdn.example.com/a.png"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.user.refresh_from_db()
        self.assertEqual(self.user.username, "newname")
        self.assertEqual(self.user.public_name, "newname")

    def test_moderation_flags_are_read_only(self):
        res = self.client.patch(
            reverse("users:me"),
            {"email": "hijack@example.com", "is_staff": True, "is_suspended": True},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.user.refresh_from_db()
        self.assertNotEqual(self.user.email, "hijack@example.com")
        self.assertFalse(self.user.is_staff)
        self.assertFalse(self.user.is_suspended)

    def test_put_not_allowed(self):
        res = self.client.put(reverse("users:me"), {"username": "x"}, format="json")
        self.assertEqual(res.status_code, 405)

    def test_anonymous_me_is_401(self):
        self.client.force_authenticate(None)
        self.assertEqual(self.client.get(reverse("users:me")).status_code, 401)


class LogoutApiTests(APITestCase):
    def test_logout_clears_cookies(self):
        self.client.force_authenticate(UserFactory())
        res = self.client.post(reverse("users:logout"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.cookies["access_token"].value, "")
        self.assertEqual(res.cookies["refresh_token"].value, "")
