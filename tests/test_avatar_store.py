import os

import pytest

from landing.avatar import (
    DirectoryAvatarStore,
    MAX_AVATAR_BYTES,
    MemoryAvatarStore,
    avatar_extension,
)
from landing.errors import InvalidInput


PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG = b"\xff\xd8\xff\xe0" + b"\x01" * 32


@pytest.fixture(params=["directory", "memory"])
def store(request, tmp_path):
    if request.param == "directory":
        return DirectoryAvatarStore(str(tmp_path))
    return MemoryAvatarStore()


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("me.png", ".png"),
        ("ME.PNG", ".png"),
        ("photo.final.webp", ".webp"),
        ("noext", ".jpg"),
        ("", ".jpg"),
        (None, ".jpg"),
        ("dir/../evil.gif", ".gif"),
        ("weird.p n g", ".jpg"),
    ],
)
def test_avatar_extension(filename, expected):
    assert avatar_extension(filename) == expected


def test_find_when_empty(store):
    assert store.find() is None
    assert store.read() is None


def test_store_and_read(store):
    name = store.store(PNG, "image/png", "me.png")

    assert name == "avatar.png"
    assert store.find() == "avatar.png"
    assert store.read() == (PNG, "image/png")


def test_extension_defaults_to_jpg(store):
    assert store.store(JPEG, "image/jpeg", "blob") == "avatar.jpg"


def test_second_upload_replaces_first(store):
    store.store(PNG, "image/png", "me.png")
    store.store(JPEG, "image/jpeg", "me.jpeg")

    assert store.find() == "avatar.jpeg"
    assert store.read()[0] == JPEG


def test_rejects_non_image_and_keeps_previous(store):
    store.store(PNG, "image/png", "me.png")

    with pytest.raises(InvalidInput):
        store.store(b"hello", "text/plain", "notes.txt")
    with pytest.raises(InvalidInput):
        store.store(b"hello", None, "x.png")

    assert store.find() == "avatar.png"
    assert store.read()[0] == PNG


def test_rejects_oversized_and_keeps_previous(store):
    store.store(PNG, "image/png", "me.png")

    with pytest.raises(InvalidInput):
        store.store(b"\x00" * (MAX_AVATAR_BYTES + 1), "image/jpeg", "big.jpg")

    assert store.find() == "avatar.png"


def test_accepts_exactly_max_size(store):
    store.store(b"\x00" * MAX_AVATAR_BYTES, "image/jpeg", "big.jpg")
    assert store.find() == "avatar.jpg"


def test_remove(store):
    store.store(PNG, "image/png", "me.png")
    assert store.remove() is True
    assert store.find() is None
    assert store.remove() is False


class TestDirectory:

    def test_only_one_file_on_disk_after_replace(self, tmp_path):
        store = DirectoryAvatarStore(str(tmp_path))
        store.store(PNG, "image/png", "a.png")
        store.store(JPEG, "image/jpeg", "b.jpg")
        store.store(PNG, "image/webp", "c.webp")

        avatars = [n for n in os.listdir(tmp_path) if n.startswith("avatar.")]
        assert avatars == ["avatar.webp"]

    def test_replace_sweeps_stray_duplicates(self, tmp_path):
        (tmp_path / "avatar.png").write_bytes(PNG)
        (tmp_path / "avatar.gif").write_bytes(PNG)
        store = DirectoryAvatarStore(str(tmp_path))

        store.store(JPEG, "image/jpeg", "new.jpg")

        avatars = [n for n in os.listdir(tmp_path) if n.startswith("avatar.")]
        assert avatars == ["avatar.jpg"]

    def test_ignores_unrelated_files(self, tmp_path):
        (tmp_path / "site.json").write_text("{}")
        (tmp_path / "avatar").write_bytes(b"no dot")
        store = DirectoryAvatarStore(str(tmp_path))

        assert store.find() is None
        store.store(PNG, "image/png", "me.png")
        store.remove()
        assert sorted(os.listdir(tmp_path)) == ["avatar", "site.json"]

    def test_missing_directory_is_no_avatar(self, tmp_path):
        store = DirectoryAvatarStore(str(tmp_path / "missing"))
        assert store.find() is None
        assert store.remove() is False

    def test_store_creates_directory(self, tmp_path):
        store = DirectoryAvatarStore(str(tmp_path / "missing"))
        store.store(PNG, "image/png", "me.png")
        assert (tmp_path / "missing" / "avatar.png").read_bytes() == PNG


def test_path_points_at_stored_file(tmp_path):
    store = DirectoryAvatarStore(str(tmp_path))
    assert store.path() is None

    store.store(PNG, "image/png", "me.png")
    assert store.path() == os.path.join(str(tmp_path), "avatar.png")


def test_memory_store_has_no_path():
    store = MemoryAvatarStore()
    store.store(PNG, "image/png", "me.png")
    assert store.path() is None
