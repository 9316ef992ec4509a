from dataclasses import dataclass


@dataclass(frozen=True)
class ImageState:
    """
    Image selected by the user plus the fields derived from it.

    ``base64`` and ``mime_type`` are always derived together from ``raw_bytes``;
    a new selection replaces the whole value.
    """

    raw_bytes: bytes | None = None
    preview_url: str | None = None
    base64: str | None = None
    mime_type: str | None = None

    @classmethod
    def empty(cls) -> "ImageState":
        return cls()

    @property
    def is_ready(self) -> bool:
        return bool(self.base64 and self.mime_type)
