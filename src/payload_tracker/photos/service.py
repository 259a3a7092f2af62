from __future__ import annotations

import base64
import io
from typing import Iterable

from PIL import Image, UnidentifiedImageError

from ..core.constants import DEFAULT_MAX_PHOTO_BYTES
from ..core.exceptions import ValidationError


class PhotoService:
    """Turns uploaded proof images into data-URL strings stored on the record."""

    def __init__(self, *, max_bytes: int = DEFAULT_MAX_PHOTO_BYTES):
        self._max_bytes = int(max_bytes)

    def encode(self, data: bytes) -> str:
        if not data:
            raise ValidationError("Arquivo de imagem vazio")
        if len(data) > self._max_bytes:
            raise ValidationError(f"Imagem maior que {self._max_bytes // (1024 * 1024)} MB")

        try:
            with Image.open(io.BytesIO(data)) as img:
                fmt = img.format
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
            raise ValidationError("Arquivo de imagem inválido") from exc

        mime = Image.MIME.get(fmt or "", "application/octet-stream")
        return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"

    def encode_uploads(self, files: Iterable) -> tuple[str, ...]:
        """Encode werkzeug ``FileStorage`` objects; empty file inputs are skipped."""
        out = []
        for f in files:
            if not f or not getattr(f, "filename", ""):
                continue
            out.append(self.encode(f.read()))
        return tuple(out)
