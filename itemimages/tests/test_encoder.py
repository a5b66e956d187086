"""Tests for JpegEncoder."""

import io

import pytest
from PIL import Image

from itemimages.encoder import JpegEncoder
from itemimages.exceptions import EncodeError


class TestJpegEncoder:
    """Tests for JpegEncoder."""
    
    def test_encode_rgb(self):
        encoder = JpegEncoder()
        
        data = encoder.encode(Image.new('RGB', (40, 30), color='red'), 85)
        
        result = Image.open(io.BytesIO(data))
        assert result.format == 'JPEG'
        assert result.size == (40, 30)
        assert result.mode == 'RGB'
    
    def test_encode_rgba_discards_alpha(self):
        encoder = JpegEncoder()
        img = Image.new('RGBA', (20, 20), color=(0, 0, 0, 0))
        
        data = encoder.encode(img, 90)
        
        result = Image.open(io.BytesIO(data))
        assert result.mode == 'RGB'
        # Fully transparent pixels become the white background
        r, g, b = result.getpixel((10, 10))
        assert min(r, g, b) > 240
    
    @pytest.mark.parametrize('mode', ['L', 'LA', 'P', 'CMYK', '1'])
    def test_flatten_modes(self, mode):
        encoder = JpegEncoder()
        
        assert encoder.flatten(Image.new(mode, (8, 8))).mode == 'RGB'
    
    @pytest.mark.parametrize('mode, value, expected', [
        ('I;16', 1000, 3),
        ('I;16', 32768, 128),
        ('I;16', 60000, 234),
        ('I', 32768, 128),
        ('F', 0.5, 127),
        ('F', 200.0, 200),
    ])
    def test_flatten_high_bit_depth_keeps_tone(self, mode, value, expected):
        img = Image.new(mode, (8, 8), value)
        
        flat = JpegEncoder().flatten(img)
        
        assert flat.mode == 'RGB'
        r, g, b = flat.getpixel((4, 4))
        assert r == g == b
        assert abs(r - expected) <= 1
    
    def test_encode_16bit_grayscale_not_white(self):
        data = JpegEncoder().encode(Image.new('I;16', (40, 30), 32768), 95)
        
        result = Image.open(io.BytesIO(data))
        assert result.mode == 'RGB'
        assert all(abs(c - 128) <= 3 for c in result.getpixel((20, 15)))
    
    def test_flatten_palette_with_transparency(self):
        img = Image.new('P', (8, 8), color=0)
        img.info['transparency'] = 0
        
        flat = JpegEncoder(background=(0, 255, 0)).flatten(img)
        
        assert flat.getpixel((0, 0)) == (0, 255, 0)
    
    def test_flatten_rgb_is_identity(self):
        img = Image.new('RGB', (8, 8))
        
        assert JpegEncoder().flatten(img) is img
    
    def test_lower_quality_is_smaller(self):
        encoder = JpegEncoder()
        img = Image.effect_noise((200, 200), 64).convert('RGB')
        
        assert len(encoder.encode(img, 30)) < len(encoder.encode(img, 95))
    
    @pytest.mark.parametrize('quality', [0, 101])
    def test_invalid_quality(self, quality):
        with pytest.raises(ValueError):
            JpegEncoder().encode(Image.new('RGB', (8, 8)), quality)
    
    def test_save_failure_wrapped(self, mocker):
        img = Image.new('RGB', (8, 8))
        mocker.patch.object(Image.Image, 'save', side_effect=OSError('encoder error -2'))
        
        with pytest.raises(EncodeError):
            JpegEncoder().encode(img, 85)
