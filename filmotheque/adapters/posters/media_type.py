"""Detection du type MIME d'une image a partir de ses premiers octets."""

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)

DEFAULT_MEDIA_TYPE = "application/octet-stream"


def guess_media_type(data: bytes) -> str:
    """Retourne le type MIME de l'image, ou application/octet-stream."""
    for signature, media_type in _SIGNATURES:
        if data.startswith(signature):
            return media_type
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return DEFAULT_MEDIA_TYPE
