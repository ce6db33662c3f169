#
# Turn a module matrix into a raster image with a quiet zone.
#

import numpy as np
from PIL import Image

PIXEL_DARK = 0
PIXEL_LIGHT = 255


def to_array(modules, scale : int=4, margin : int=4) -> np.ndarray:
    """
    Parameters:
    -----------
    modules : array like
        Square boolean matrix, True for a dark module.
    scale : int
        Pixels per module edge.
    margin : int
        Width of the light quiet zone in modules.

    Return:
    -------
        uint8 grayscale image, (d + 2*margin) * scale pixels square.
    """
    if (scale < 1):
        raise ValueError(f"Scale must be at least 1, got {scale}")
    if (margin < 0):
        raise ValueError(f"Margin cannot be negative, got {margin}")

    modules = np.asarray(modules, dtype=bool)

    if (modules.ndim != 2 or modules.shape[0] != modules.shape[1]):
        raise ValueError(f"Expected a square module matrix, got shape {modules.shape}")

    img = np.where(modules, PIXEL_DARK, PIXEL_LIGHT).astype(np.uint8)
    img = np.pad(img, margin, mode="constant", constant_values=PIXEL_LIGHT)

    return np.kron(img, np.ones((scale,scale), dtype=np.uint8))


def to_image(modules, scale : int=4, margin : int=4) -> Image.Image:
    return Image.fromarray(to_array(modules, scale, margin))


def save(modules, path, scale : int=4, margin : int=4):
    to_image(modules, scale, margin).save(path)
