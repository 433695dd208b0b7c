#image.py
import logging
import os

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def to_bytes(img):
    """Float [0, 1] image -> uint8 via int(channel * 255) (truncating)."""
    return (np.clip(np.asarray(img, dtype=np.float64), 0.0, 1.0) * 255).astype(np.uint8)


def save_ppm(img, path):
    """Write a plain-text (P3) PPM, one 'r g b' line per pixel, top row first."""
    data = to_bytes(img)
    h, w = data.shape[:2]
    with open(path, 'w') as fh:
        fh.write(f"P3\n{w} {h}\n255\n")
        for r, g, b in data.reshape(-1, 3):
            fh.write(f"{r} {g} {b}\n")


def save_image(img, path):
    """Save a float image; '.ppm' goes through save_ppm, anything else through Pillow."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    if os.path.splitext(path)[1].lower() == '.ppm':
        save_ppm(img, path)
    else:
        Image.fromarray(to_bytes(img)).save(path)
    logger.info("Saved %s", path)


def load_image(path):
    """Read an image back as a (h, w, 3) float array in [0, 1]."""
    with Image.open(path) as im:
        return np.asarray(im.convert('RGB'), dtype=np.float64) / 255.0
