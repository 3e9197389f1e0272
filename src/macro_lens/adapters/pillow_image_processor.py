"""Pillow-backed transcoding of uploaded meal photos."""

import io
import logging
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from macro_lens.domain.errors import ImageRejected
from macro_lens.services.analysis import ImageProcessor

logger = logging.getLogger(__name__)

_ALPHA_MODES = ("RGBA", "LA")


@dataclass
class PillowImageProcessor(ImageProcessor):
    """Converts any readable image to an RGB JPEG."""

    quality: int = 85

    def to_jpeg(self, image_bytes: bytes) -> bytes:
        """Return JPEG bytes, compositing transparency onto white."""
        try:
            img = Image.open(io.BytesIO(image_bytes))
            img.load()
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
        ) as exc:
            logger.warning("Rejected unreadable image: %s", exc)
            raise ImageRejected(str(exc)) from exc

        if img.mode == "P":
            img = img.convert("RGBA")
        if img.mode in _ALPHA_MODES:
            background = Image.new("RGB", img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[-1])
            img = background
        elif img.mode != "RGB":
            img = img.convert("RGB")

        output = io.BytesIO()
        img.save(output, format="JPEG", quality=self.quality, optimize=True)
        return output.getvalue()
