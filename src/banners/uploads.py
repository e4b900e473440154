import logging
import uuid

from django.core.files.storage import default_storage

from .exceptions import UploadFailure
from .validators import validate_banner_file

logger = logging.getLogger(__name__)

EXTENSIONS = {"JPEG": "jpg", "PNG": "png", "GIF": "gif", "WEBP": "webp"}


def banner_upload_path(user, image_format):
    ext = EXTENSIONS.get(image_format, "bin")
    return f"banners/{user.pk}/{uuid.uuid4().hex}.{ext}"


def store_banner_image(uploaded_file, user, banner_format):
    """
    Validate and save a banner image through the default storage.
    Returns the public URL of the stored file.

    django.core.exceptions.ValidationError propagates for bad images;
    storage failures become UploadFailure.
    """
    image_format = validate_banner_file(uploaded_file, banner_format)
    path = banner_upload_path(user, image_format)
    try:
        saved = default_storage.save(path, uploaded_file)
        url = default_storage.url(saved)
    except OSError:
        logger.exception("banner upload failed for user %s", user.pk)
        raise UploadFailure()

    logger.info("banner image stored user=%s path=%s", user.pk, saved)
    return url
