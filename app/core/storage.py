"""
S3 / MinIO object storage helpers for company logos.

All functions use aioboto3 for async I/O.  The same code works against:
  - MinIO in development  (endpoint_url=http://localhost:9000)
  - Real AWS S3           (endpoint_url=None)

Logos are uploaded by the browser straight to the bucket through a presigned
POST; the API never streams image bytes. The resulting public URL is what the
client submits as the company's logo_url.
"""
import re
import uuid

import aioboto3

from app.core.config import settings

ALLOWED_LOGO_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}


# ── Key construction ────────────────────────────────────────────────────────

def build_logo_key(user_id: str, filename: str, content_type: str) -> str:
    """
    Canonical key:  logos/{user_id}/{random}-{safe_stem}.{ext}

    The random segment keeps re-uploads from overwriting a logo that an
    approved listing still points at.
    """
    ext = ALLOWED_LOGO_TYPES[content_type]
    stem = _sanitize_filename(filename.rsplit(".", 1)[0]) or "logo"
    return f"logos/{user_id}/{uuid.uuid4().hex[:12]}-{stem}.{ext}"


def public_url_for(key: str) -> str:
    """Public URL where a stored logo is served from."""
    if settings.s3_public_base_url:
        return f"{settings.s3_public_base_url.rstrip('/')}/{key}"
    if settings.s3_endpoint_url:
        return f"{settings.s3_endpoint_url.rstrip('/')}/{settings.s3_bucket_name}/{key}"
    return f"https://{settings.s3_bucket_name}.s3.{settings.s3_region}.amazonaws.com/{key}"


def _sanitize_filename(name: str) -> str:
    """Keep only safe ASCII chars; collapse everything else to a single hyphen."""
    safe = re.sub(r"[^A-Za-z0-9_-]+", "-", name)
    safe = re.sub(r"-+", "-", safe).strip("-")
    return safe[:80].lower()


# ── Session factory ──────────────────────────────────────────────────────────

def _s3_client():
    """Return an async context-manager for an S3 client configured from settings."""
    session = aioboto3.Session()
    kwargs = dict(
        region_name=settings.s3_region,
        aws_access_key_id=settings.s3_aws_access_key_id,
        aws_secret_access_key=settings.s3_aws_secret_access_key,
    )
    if settings.s3_endpoint_url:
        kwargs["endpoint_url"] = settings.s3_endpoint_url
    return session.client("s3", **kwargs)


# ── Upload: presigned POST ───────────────────────────────────────────────────

async def generate_presign_upload(key: str, content_type: str, max_size_bytes: int) -> dict:
    """
    Generate an S3 presigned POST for direct client-to-S3 upload.

    Returns a dict with keys:
      url    — the S3 POST URL
      fields — form fields that MUST be sent before the 'file' field

    The policy pins the Content-Type and caps the size at max_size_bytes.
    """
    async with _s3_client() as s3:
        response = await s3.generate_presigned_post(
            Bucket=settings.s3_bucket_name,
            Key=key,
            Fields={"Content-Type": content_type},
            Conditions=[
                {"Content-Type": content_type},
                ["content-length-range", 1, max_size_bytes],
            ],
            ExpiresIn=settings.s3_presign_upload_expires,
        )
    return response
