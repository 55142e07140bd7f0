import os
import pytest
from pathlib import Path
from exif_renamer.scanning import filesystem
from exif_renamer.scanning.filesystem import MediaWalker, ensure_outside, validate_directory, is_media_file
from exif_renamer.exceptions import PathError, NotWritableError

def test_validate_directory_returns_absolute_path(tmp_path, monkeypatch):
    (tmp_path / "photos").mkdir()
    monkeypatch.chdir(tmp_path)

    result = validate_directory("photos/")
    assert result.samefile(tmp_path / "photos")
    assert result.is_absolute()
    assert not str(result).endswith(os.sep)

def test_validate_directory_leaves_no_temp_file(tmp_path):
    validate_directory(tmp_path)
    assert list(tmp_path.iterdir()) == []

def test_ensure_outside_rejects_nested_destination(tmp_path):
    src = tmp_path / "src"
    with pytest.raises(PathError):
        ensure_outside(src / "out", src)
    with pytest.raises(PathError):
        ensure_outside(src, src)
    # Siblings and parents are fine
    ensure_outside(tmp_path / "dst", src)
    ensure_outside(tmp_path, src)

def test_validate_directory_missing(tmp_path):
    with pytest.raises(PathError):
        validate_directory(tmp_path / "nope")

def test_validate_directory_not_a_directory(tmp_path):
    f = tmp_path / "file.jpg"
    f.write_bytes(b"x")
    with pytest.raises(PathError):
        validate_directory(f)

def test_validate_directory_not_writable(tmp_path, monkeypatch):
    def refuse(*args, **kwargs):
        raise PermissionError("read-only")
    monkeypatch.setattr(filesystem.tempfile, "NamedTemporaryFile", refuse)

    with pytest.raises(NotWritableError) as exc:
        validate_directory(tmp_path)
    # Also catchable as the built-in
    assert isinstance(exc.value, PermissionError)

@pytest.mark.parametrize(
    "name,expected",
    [
        ("photo.jpg", True),
        ("photo.JPG", True),
        ("scan.Jpeg", True),
        ("anim.gif", True),
        ("shot.png", True),
        ("clip.MOV", True),
        ("clip.mp4", True),
        ("old.mpg", True),
        ("voice.wav", True),
        ("song.wma", True),
        ("raw.cr2", False),
        ("notes.txt", False),
        ("photo.jpg.BAK", False),
        ("noext", False),
    ],
)
def test_is_media_file(name, expected):
    assert is_media_file(Path(name)) == expected

def test_walker_recurses_and_filters(tmp_path):
    root = tmp_path
    sub = root / "a" / "b"
    sub.mkdir(parents=True)
    (root / "top.jpg").write_bytes(b"1")
    (root / "readme.txt").write_text("x")
    (sub / "deep.MOV").write_bytes(b"2")
    (root / "a" / ".hidden.png").write_bytes(b"3")

    files = list(MediaWalker().iter_media(root))

    assert sorted(files) == sorted([
        root / "top.jpg",
        sub / "deep.MOV",
        root / "a" / ".hidden.png",
    ])

@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_walker_skips_symlinks(tmp_path):
    real_dir = tmp_path / "real"
    real_dir.mkdir()
    (real_dir / "photo.jpg").write_bytes(b"x")

    root = tmp_path / "root"
    root.mkdir()
    (root / "own.jpg").write_bytes(b"y")
    os.symlink(real_dir / "photo.jpg", root / "link.jpg")
    os.symlink(real_dir, root / "linked_dir")

    files = list(MediaWalker().iter_media(root))
    assert files == [root / "own.jpg"]

def test_walker_is_lazy(tmp_path):
    (tmp_path / "a.jpg").write_bytes(b"x")
    gen = MediaWalker().iter_media(tmp_path)
    assert next(gen) == tmp_path / "a.jpg"
    with pytest.raises(StopIteration):
        next(gen)
