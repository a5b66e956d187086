"""
Pytest fixtures for itemimages tests.
"""

import io
import logging

import pytest
from PIL import Image


def make_image_bytes(size=(100, 100), mode='RGB', color='red', fmt='JPEG'):
    """Encode a solid-color image in memory."""
    img = Image.new(mode, size, color=color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def image_bytes():
    """Fixture providing the in-memory image encoder."""
    return make_image_bytes


@pytest.fixture
def sample_image_bytes():
    """Fixture providing sample JPEG image bytes."""
    return make_image_bytes()


@pytest.fixture
def sample_png_bytes():
    """Fixture providing sample PNG image bytes with transparency."""
    return make_image_bytes(mode='RGBA', color=(255, 0, 0, 128), fmt='PNG')


@pytest.fixture
def jpeg_file(tmp_path):
    """A 1000x600 JPEG on disk."""
    path = tmp_path / 'src' / 'photo.jpg'
    path.parent.mkdir()
    path.write_bytes(make_image_bytes(size=(1000, 600), color='blue'))
    return path


@pytest.fixture
def wide_jpeg_file(tmp_path):
    """A 2400x1000 JPEG on disk, wider than the default display width."""
    path = tmp_path / 'src' / 'wide.jpg'
    path.parent.mkdir(exist_ok=True)
    path.write_bytes(make_image_bytes(size=(2400, 1000), color='green'))
    return path


@pytest.fixture
def png_file(tmp_path, sample_png_bytes):
    """A small RGBA PNG on disk."""
    path = tmp_path / 'src' / 'logo.png'
    path.parent.mkdir(exist_ok=True)
    path.write_bytes(sample_png_bytes)
    return path


@pytest.fixture
def dest_dir(tmp_path):
    """Destination directory that does not exist yet."""
    return tmp_path / 'data' / 'images'


@pytest.fixture
def config():
    """Fixture providing the default image configuration."""
    from itemimages.image_config import ImageConfig
    return ImageConfig()


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    return logging.getLogger('test')


@pytest.fixture
def versioner(logger):
    """Fixture providing an ImageVersioner with real store and encoder."""
    from itemimages.versioner import ImageVersioner
    return ImageVersioner(logger=logger)
