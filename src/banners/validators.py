from django.conf import settings
from django.core.exceptions import ValidationError
from PIL import Image, UnidentifiedImageError

from .catalog import get_dimensions_for_format

# Requires Pillow
BYTES_IN_MB = 1024 * 1024
DEFAULT_ALLOWED_FORMATS = {"JPEG", "PNG", "GIF", "WEBP"}


def validate_banner_file(uploaded_file, banner_format):
    """
    Validate an uploaded banner against:
      1) max file size (MB)
      2) integrity + allowed formats (JPEG/PNG/GIF/WEBP by default)
      3) exact pixel size of the banner format (e.g. 728x90)
    Leaves the file pointer at position 0 for subsequent saving.
    Returns the detected image format.
    """
    # 1) file size
    max_mb = int(getattr(settings, "BANNER_IMAGE_MAX_MB", 2))
    if uploaded_file.size > max_mb * BYTES_IN_MB:
        raise ValidationError(f"File too large: max {max_mb} MB")

    # 2) format & integrity
    try:
        uploaded_file.seek(0)
        img = Image.open(uploaded_file)
        img.verify()  # integrity check
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ValidationError("Unsupported or corrupted image")

    # verify() closes the fp; reopen to read size/format
    uploaded_file.seek(0)
    img = Image.open(uploaded_file)

    fmt = (img.format or "").upper()
    if fmt == "JPG":
        fmt = "JPEG"

    allowed = set(getattr(settings, "BANNER_IMAGE_ALLOWED_FORMATS", DEFAULT_ALLOWED_FORMATS))
    if fmt not in allowed:
        raise ValidationError(f"Unsupported format: {fmt}. Allowed: {', '.join(sorted(allowed))}")

    # 3) dimensions must match the slot exactly
    w, h = img.size
    expected_w, expected_h = get_dimensions_for_format(banner_format)
    if (w, h) != (expected_w, expected_h):
        raise ValidationError(
            f"Banner must be exactly {expected_w}x{expected_h}px, got {w}x{h}px"
        )

    # reset fp for saving in the storage
    uploaded_file.seek(0)
    return fmt
