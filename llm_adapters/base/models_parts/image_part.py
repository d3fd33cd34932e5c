"""
Image content part carrying a base64 payload and its mime type.

Canonical requests follow the OpenAI convention of ``data:`` URLs for inline
images; :meth:`ImagePart.from_data_url` and :meth:`ImagePart.to_data_url`
convert between that form and the split ``(mime_type, data)`` pair vendors
such as Anthropic expect.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal

_DATA_URL_PREFIX = "data:"
_BASE64_MARKER = ";base64,"


@dataclass(frozen=True)
class ImagePart:
    """An inline image.

    Attributes:
        data: Base64 payload without any ``data:`` URL prefix.
        mime_type: Media type such as ``"image/png"``.
    """

    data: str
    mime_type: str = "image/jpeg"
    type: Literal["image"] = "image"

    @classmethod
    def from_data_url(cls, url: str) -> "ImagePart":
        """Build an image part from ``data:<mime>;base64,<payload>``.

        Raises:
            ValueError: If ``url`` is not a base64 data URL.
        """
        if not url.startswith(_DATA_URL_PREFIX) or _BASE64_MARKER not in url:
            raise ValueError("image url must be a base64 data: URL")
        header, payload = url[len(_DATA_URL_PREFIX):].split(_BASE64_MARKER, 1)
        return cls(data=payload, mime_type=header or "image/jpeg")

    def to_data_url(self) -> str:
        return f"{_DATA_URL_PREFIX}{self.mime_type}{_BASE64_MARKER}{self.data}"

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI ``image_url`` content part shape."""
        return {"type": "image_url", "image_url": {"url": self.to_data_url()}}


__all__ = ["ImagePart"]
