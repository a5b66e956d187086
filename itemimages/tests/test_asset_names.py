"""Tests for AssetNames."""

import os
import uuid

import pytest

from itemimages.asset_names import AssetNames, SLOT_DISPLAY, SLOT_ORIGINAL, SLOT_THUMBNAIL


class TestAssetNames:
    """Tests for the triplet filename convention."""
    
    def test_allocate_uses_uuid4(self):
        names = AssetNames.allocate('png')
        
        assert uuid.UUID(names.image_id).version == 4
    
    def test_filenames(self):
        names = AssetNames('0b7d7a38-8c5e-4d4c-9a7e-1f2a3b4c5d6e', 'webp')
        
        assert names.original == 'original-0b7d7a38-8c5e-4d4c-9a7e-1f2a3b4c5d6e.webp'
        assert names.display == 'display-0b7d7a38-8c5e-4d4c-9a7e-1f2a3b4c5d6e.jpg'
        assert names.thumbnail == 'thumb-0b7d7a38-8c5e-4d4c-9a7e-1f2a3b4c5d6e.jpg'
    
    def test_paths_in_share_directory(self, tmp_path):
        names = AssetNames.allocate()
        
        paths = names.paths_in(str(tmp_path))
        
        assert len(paths) == 3
        assert {os.path.dirname(p) for p in paths} == {str(tmp_path)}
        assert all(names.image_id in p for p in paths)
    
    def test_allocations_are_unique(self):
        ids = {AssetNames.allocate().image_id for _ in range(500)}
        
        assert len(ids) == 500
    
    def test_unknown_slot(self):
        with pytest.raises(ValueError):
            AssetNames.allocate().filename('preview')
    
    def test_parse(self):
        names = AssetNames.allocate('png')
        
        assert AssetNames.parse(names.original) == (SLOT_ORIGINAL, names.image_id)
        assert AssetNames.parse(names.display) == (SLOT_DISPLAY, names.image_id)
        assert AssetNames.parse('/x/y/' + names.thumbnail) == (SLOT_THUMBNAIL, names.image_id)
    
    def test_parse_rejects_other_files(self):
        image_id = str(uuid.uuid4())
        
        assert AssetNames.parse('notes.txt') is None
        assert AssetNames.parse(f"display-{image_id}.png") is None
        assert AssetNames.parse(f".original-{image_id}.jpg.partial") is None
