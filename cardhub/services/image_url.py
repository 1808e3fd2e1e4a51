"""
Image URL Normalizer
Turns stored photo/logo paths into URLs a card rasterizer can fetch
"""

from typing import Optional
from cardhub.config import settings

UPLOAD_PREFIXES = ("/uploads/", "uploads/")

# Storage folder for bare filenames, keyed by the field they were stored for
IMAGE_FOLDERS = {
    "teacher_photo": "teachers",
    "profilePicture": "teachers",
    "student_photo": "students",
    "school_logo": "school-info/logos",
}
DEFAULT_IMAGE_FOLDER = "school-info"


def format_image_url(image_path: Optional[str], field_type: Optional[str] = None, base_url: Optional[str] = None) -> str:
    """
    Format an image path to be accessible from the frontend

    Args:
        image_path: Stored value (absolute URL, upload path or bare filename)
        field_type: Field the image belongs to; picks the folder for bare filenames
        base_url: Public API base, defaults to settings.APP_URL

    Returns:
        Absolute URL, or empty string when there is no image
    """
    if not image_path:
        return ""

    if image_path.startswith("http://") or image_path.startswith("https://"):
        return image_path

    backend_url = (base_url or settings.APP_URL).rstrip("/")
    files_path = "/" + settings.FILES_API_PATH.strip("/")

    # Already in file-serving format
    if image_path.startswith(files_path + "/"):
        return f"{backend_url}{image_path}"

    # uploads/<folder>/.../<filename> -> <files>/<folder>/<filename>
    if image_path.startswith(UPLOAD_PREFIXES):
        parts = [part for part in image_path.split("/") if part]
        if len(parts) >= 3:
            folder = parts[1]
            filename = parts[-1]
            return f"{backend_url}{files_path}/{folder}/{filename}"

    if "/" not in image_path:
        folder = IMAGE_FOLDERS.get(field_type or "", DEFAULT_IMAGE_FOLDER)
        return f"{backend_url}{files_path}/{folder}/{image_path}"

    normalized_path = image_path if image_path.startswith("/") else f"/{image_path}"
    return f"{backend_url}{normalized_path}"
