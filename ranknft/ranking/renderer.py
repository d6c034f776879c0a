"""Per-rank token images drawn with matplotlib."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from matplotlib import image as mpimg
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from .models import RankedCollection
from .persistence import write_bytes

logger = logging.getLogger(__name__)

# Figure.savefig works in inches; 5.12in at 100dpi gives a 512px square.
SIZE_PX = 512
DPI = 100

# Text block inside the dark panel of the background art, in pixels
TEXT_X = 150
TEXT_Y = (120, 140, 160, 180)
FONT_PX = 20
NAME_MAX_CHARS = 20


class RenderError(Exception):
    """An image could not be produced (missing asset or drawing failure)."""


class ImageRenderer:
    """Draws the rank card for a collection onto its colored background.

    Backgrounds are `{color}_spiky.png` in the assets directory. Output files
    are `token{rank}.png` in the images directory, replaced atomically so the
    static file server never serves a half-written image.
    """

    def __init__(self, assets_dir: Path, images_dir: Path) -> None:
        self._assets_dir = Path(assets_dir)
        self._images_dir = Path(images_dir)
        self._backgrounds: dict[str, np.ndarray] = {}

    @property
    def images_dir(self) -> Path:
        return self._images_dir

    def render(self, rank: int, name: str, floor_price: float, volume: float, color: str) -> bytes:
        """PNG bytes for one rank card. Raises RenderError."""
        background = self._background(color)
        try:
            fig = Figure(figsize=(SIZE_PX / DPI, SIZE_PX / DPI), dpi=DPI)
            FigureCanvasAgg(fig)
            ax = fig.add_axes((0, 0, 1, 1))
            ax.imshow(background, extent=(0, SIZE_PX, SIZE_PX, 0))
            ax.set_xlim(0, SIZE_PX)
            ax.set_ylim(SIZE_PX, 0)
            ax.axis("off")

            font_pt = FONT_PX * 72 / DPI
            lines = (
                f"Rank: {rank}",
                f"Name: {name[:NAME_MAX_CHARS]}",
                f"Floor: {floor_price:.2f} APE",
                f"Volume: {volume:.2f} APE",
            )
            for y, text in zip(TEXT_Y, lines):
                ax.text(TEXT_X, y, text, color=color, fontsize=font_pt, family="sans-serif", va="baseline")

            buf = io.BytesIO()
            fig.savefig(buf, format="png", dpi=DPI)
            return buf.getvalue()
        except Exception as e:
            raise RenderError(f"drawing rank {rank} failed: {e}") from e

    def render_ranked(self, ranked: RankedCollection) -> bytes:
        c = ranked.collection
        return self.render(ranked.rank, c.name, c.floor_price, c.volume_24h, ranked.color)

    def write(self, rank: int, png: bytes) -> Path:
        path = self._images_dir / f"token{rank}.png"
        write_bytes(path, png)
        return path

    def _background(self, color: str) -> np.ndarray:
        """Load (once) the background art for a color."""
        if color not in self._backgrounds:
            path = self._assets_dir / f"{color}_spiky.png"
            if not path.exists():
                raise RenderError(f"missing background asset {path}")
            try:
                self._backgrounds[color] = mpimg.imread(path)
            except (OSError, ValueError) as e:
                raise RenderError(f"unreadable background asset {path}: {e}") from e
        return self._backgrounds[color]
