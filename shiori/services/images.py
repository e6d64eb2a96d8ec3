"""Cloudinary image URL optimization."""

import re

CLOUDINARY_HOST = "res.cloudinary.com"
UPLOAD_SEGMENT = "/upload/"

DEFAULT_WIDTH = 800
CONTENT_IMAGE_WIDTH = 1000

IMG_TAG_PATTERN = re.compile(r'<img\s+([^>]*?)src="([^"]+)"([^>]*?)>', re.IGNORECASE)


def get_optimized_image_url(url: str | None, width: int = DEFAULT_WIDTH) -> str | None:
    """Add auto format, auto quality and a width limit to a Cloudinary URL.

    Empty, non-Cloudinary, and already optimized URLs are returned unchanged.
    """
    if not url or CLOUDINARY_HOST not in url:
        return url

    if UPLOAD_SEGMENT in url and f"{UPLOAD_SEGMENT}f_auto" not in url:
        parts = url.split(UPLOAD_SEGMENT)
        if len(parts) == 2:
            # f_auto: WebP/AVIF, q_auto: quality, c_limit: never upscale
            return f"{parts[0]}{UPLOAD_SEGMENT}f_auto,q_auto,w_{width},c_limit/{parts[1]}"

    return url


def _optimize_img_tag(match: re.Match) -> str:
    before, src, after = match.groups()
    tag = f'<img {before}src="{get_optimized_image_url(src, CONTENT_IMAGE_WIDTH)}"{after}>'
    if 'loading="' not in tag:
        tag = tag.replace("<img ", '<img loading="lazy" ', 1)
    if 'decoding="' not in tag:
        tag = tag.replace("<img ", '<img decoding="async" ', 1)
    return tag


def get_optimized_content_html(html: str | None) -> str | None:
    """Optimize Cloudinary ``<img>`` sources in post HTML and lazy-load every image."""
    if not html:
        return html
    return IMG_TAG_PATTERN.sub(_optimize_img_tag, html)
