import pytest
from pathlib import Path
from exif_renamer.metadata.extract import MetadataExtractor

class FakeExtractor(MetadataExtractor):
    """Serves tags from a {file name: {tag: value}} table instead of exiftool."""
    def __init__(self, tags_by_name):
        super().__init__()
        self.tags_by_name = tags_by_name
        self.seen = []

    def read_fields(self, path, fields):
        self.seen.append(Path(path))
        tags = self.tags_by_name.get(Path(path).name, {})
        return {k: v for k, v in tags.items() if k in fields}

@pytest.fixture
def src(tmp_path):
    """An empty source root."""
    d = tmp_path / "src"
    d.mkdir()
    return d

@pytest.fixture
def dst(tmp_path):
    """An empty destination root."""
    d = tmp_path / "dst"
    d.mkdir()
    return d

@pytest.fixture
def fake_extractor():
    def make(tags_by_name):
        return FakeExtractor(tags_by_name)
    return make
