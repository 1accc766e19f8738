"""
Map tile acquisition and pixel sampling.

This module downloads raster tiles from a slippy-map tile server and exposes
them as read-only pixel sources for the rasterizer.

Fetch strategy:
- Tiles for one rasterization are fetched concurrently; the call returns only
  after every fetch has finished (successfully or not)
- A failed tile is logged and left out of the result; it never aborts the batch
- An optional on-disk cache ({cache_dir}/{z}/{x}/{y}.png) is read before the
  network and filled after successful downloads
- No retries; a tile that fails stays missing for that rasterization
"""

import io
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Iterable, Optional, Protocol, Tuple

import numpy as np
import requests
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from .constants import (
    MAX_FETCH_WORKERS,
    REQUEST_TIMEOUT,
    TILE_SERVER_URL,
    USER_AGENT,
)
from .geo_tiles import TileCoordinate

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

# Raised by Pillow or TileImage for bad, truncated or oversized tile data
DECODE_ERRORS = (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError)


class TileImage:
    """Decoded tile held as an (height, width, 3) uint8 array."""

    def __init__(self, pixels: NDArray[np.uint8]):
        pixels = np.asarray(pixels, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] < 3:
            raise ValueError(f"Expected an (H, W, 3) RGB array, got shape={pixels.shape}")
        self.pixels = pixels[:, :, :3]

    @classmethod
    def from_bytes(cls, data: bytes) -> "TileImage":
        with Image.open(io.BytesIO(data)) as img:
            return cls(np.asarray(img.convert("RGB")))

    @classmethod
    def solid(cls, color: RGB, size: int = 256) -> "TileImage":
        """Uniformly coloured tile, handy for tests and offline runs."""
        pixels = np.empty((size, size, 3), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def pixel(self, px: int, py: int) -> RGB:
        r, g, b = self.pixels[py, px]
        return int(r), int(g), int(b)

    def average_rgb(self, px: int, py: int, radius: int) -> RGB:
        """
        Average the colour of a square window centred on (px, py).

        Window coordinates falling outside the image are clamped to the
        nearest edge pixel, so edge pixels are counted more than once.

        Args:
            px, py: Centre pixel
            radius: Half-size of the window; the window is (2*radius+1)^2 pixels

        Returns:
            Rounded mean (r, g, b)
        """
        offsets = np.arange(-radius, radius + 1)
        xs = np.clip(px + offsets, 0, self.width - 1)
        ys = np.clip(py + offsets, 0, self.height - 1)
        window = self.pixels[np.ix_(ys, xs)].reshape(-1, 3).astype(np.float64)
        mean = np.floor(window.mean(axis=0) + 0.5)
        return int(mean[0]), int(mean[1]), int(mean[2])


class TileSource(Protocol):
    """Anything able to turn tile coordinates into decoded images."""

    def fetch_tiles(self, tiles: Iterable[TileCoordinate]) -> Dict[TileCoordinate, TileImage]:
        ...


class TileFetcher:
    """
    HTTP tile source with an optional on-disk cache.

    The fetcher keeps no state between calls apart from the HTTP session, so
    an abandoned rasterization cannot leak tiles into the next one.
    """

    def __init__(
        self,
        server_url: str = TILE_SERVER_URL,
        cache_dir: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT,
        max_workers: int = MAX_FETCH_WORKERS,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the tile fetcher.

        Args:
            server_url: Base URL of the tile server, tiles live at {server_url}/{z}/{x}/{y}.png
            cache_dir: Directory for cached tiles (None disables caching)
            timeout: Per-request timeout in seconds
            max_workers: Upper bound on concurrent downloads
            session: Pre-configured requests session (a new one is created otherwise)

        Raises:
            OSError: If the cache directory cannot be created
        """
        self.server_url = server_url.rstrip("/")
        self.timeout = timeout
        self.max_workers = max(1, max_workers)

        self.cache_dir: Optional[Path] = None
        if cache_dir:
            self.cache_dir = Path(cache_dir)
            self.cache_dir.mkdir(parents=True, exist_ok=True)

        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)

    def _cache_path(self, tile: TileCoordinate) -> Optional[Path]:
        if self.cache_dir is None:
            return None
        return self.cache_dir / str(tile.zoom) / str(tile.x) / f"{tile.y}.png"

    def _load_from_cache(self, tile: TileCoordinate) -> Optional[TileImage]:
        path = self._cache_path(tile)
        if path is None or not path.exists():
            return None
        try:
            image = TileImage.from_bytes(path.read_bytes())
            logger.debug(f"Cache hit for tile {tile.zoom}/{tile.x}/{tile.y}")
            return image
        except DECODE_ERRORS as e:
            logger.warning(f"Ignoring unreadable cached tile {path}: {e}")
            return None

    def _save_to_cache(self, tile: TileCoordinate, data: bytes) -> None:
        path = self._cache_path(tile)
        if path is None:
            return
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.error(f"Error saving tile cache file {path}: {e}")

    def fetch_tile(self, tile: TileCoordinate) -> Optional[TileImage]:
        """
        Fetch and decode a single tile.

        Returns:
            The decoded tile, or None if it could not be downloaded or decoded
        """
        cached = self._load_from_cache(tile)
        if cached is not None:
            return cached

        url = tile.url(self.server_url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            image = TileImage.from_bytes(response.content)
        except requests.exceptions.Timeout:
            logger.warning(f"[TILE] Request timeout for {url}")
            return None
        except requests.exceptions.RequestException as e:
            logger.warning(f"[TILE] Request error for {url}: {e}")
            return None
        except DECODE_ERRORS as e:
            logger.warning(f"[TILE] Could not decode {url}: {e}")
            return None

        self._save_to_cache(tile, response.content)
        return image

    def fetch_tiles(self, tiles: Iterable[TileCoordinate]) -> Dict[TileCoordinate, TileImage]:
        """
        Fetch a batch of tiles concurrently and wait for all of them.

        Args:
            tiles: Tiles to fetch

        Returns:
            Mapping of successfully fetched tiles to their images
        """
        tiles = list(dict.fromkeys(tiles))
        if not tiles:
            return {}

        images: Dict[TileCoordinate, TileImage] = {}
        workers = min(self.max_workers, len(tiles))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_tile = {executor.submit(self.fetch_tile, tile): tile for tile in tiles}
            for future in as_completed(future_to_tile):
                tile = future_to_tile[future]
                image = future.result()
                if image is not None:
                    images[tile] = image

        failed = len(tiles) - len(images)
        if failed:
            logger.warning(f"{failed} of {len(tiles)} tiles could not be fetched")
        logger.info(f"Fetched {len(images)} tiles from {self.server_url}")
        return images
