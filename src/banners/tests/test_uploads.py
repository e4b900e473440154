import shutil
import tempfile
from io import BytesIO

from PIL import Image
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from src.banners.factories import UserFactory
from src.banners.validators import validate_banner_file

TEMP_MEDIA = tempfile.mkdtemp()


def make_image(size=(728, 90), fmt="PNG", name=None):
    file = BytesIO()
    img = Image.new("RGB", size, (30, 120, 200))
    img.save(file, fmt)
    file.seek(0)
    ext = {"JPEG": "jpg"}.get(fmt, fmt.lower())
    return SimpleUploadedFile(name or f"banner.{ext}", file.read(), content_type=f"image/{ext}")


class BannerFileValidationTests(TestCase):
    def test_exact_dimensions_pass(self):
        self.assertEqual(validate_banner_file(make_image((728, 90)), "728x90"), "PNG")
        self.assertEqual(validate_banner_file(make_image((300, 250), "JPEG"), "300x250"), "JPEG")
        self.assertEqual(validate_banner_file(make_image((300, 250), "GIF"), "300x250"), "GIF")

    def test_wrong_dimensions(self):
        with self.assertRaisesMessage(ValidationError, "exactly 728x90px"):
            validate_banner_file(make_image((300, 250)), "728x90")

    def test_not_an_image(self):
        bogus = SimpleUploadedFile("banner.png", b"definitely not a png", content_type="image/png")
        with self.assertRaisesMessage(ValidationError, "Unsupported or corrupted image"):
            validate_banner_file(bogus, "728x90")

    def test_disallowed_format(self):
        with self.assertRaisesMessage(ValidationError, "Unsupported format: BMP"):
            validate_banner_file(make_image((728, 90), "BMP"), "728x90")

    @override_settings(BANNER_IMAGE_MAX_MB=0)
    def test_file_too_large(self):
        with self.assertRaisesMessage(ValidationError, "File too large"):
            validate_banner_file(make_image(), "728x90")

    def test_pointer_is_rewound(self):
        upload = make_image()
        validate_banner_file(upload, "728x90")
        self.assertEqual(upload.tell(), 0)


@override_settings(MEDIA_ROOT=TEMP_MEDIA)
class BannerUploadApiTests(TestCase):
    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(TEMP_MEDIA, ignore_errors=True)

    def setUp(self):
        self.client = APIClient()
        self.member = UserFactory()
        self.url = reverse("banners:uploads")

    def test_upload_returns_url(self):
        self.client.force_authenticate(self.member)
        res = self.client.post(self.url, {"image": make_image(), "format": "728x90"}, format="multipart")
        self.assertEqual(res.status_code, 201, res.data)
        self.assertTrue(res.data["success"])
        self.assertIn(f"banners/{self.member.id}/", res.data["image_url"])
        self.assertTrue(res.data["image_url"].endswith(".png"))

    def test_upload_wrong_size(self):
        self.client.force_authenticate(self.member)
        res = self.client.post(self.url, {"image": make_image((100, 100)), "format": "728x90"}, format="multipart")
        self.assertEqual(res.status_code, 400)
        self.assertIn("image", res.data)

    def test_upload_requires_auth(self):
        res = self.client.post(self.url, {"image": make_image(), "format": "728x90"}, format="multipart")
        self.assertEqual(res.status_code, 401)
