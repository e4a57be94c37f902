import os

import pytest
import requests

from app.core.errors import BadRequest, ProviderError
from app.services import storage as storage_module
from app.services.storage import LocalStorage, SupabaseStorage, build_object_path


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    @property
    def ok(self):
        return self.status_code < 400

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} error")


def test_object_path_is_scoped_to_user():
    assert build_object_path("u1", "cv.pdf") == "u1/cv.pdf"
    assert build_object_path("u1", "../other/cv.pdf") == "u1/cv.pdf"
    assert build_object_path("u1", "C:\\temp\\logo.png") == "u1/logo.png"


@pytest.mark.parametrize("name", ["", "   ", "..", "dir/"])
def test_object_path_rejects_empty_names(name):
    with pytest.raises(BadRequest):
        build_object_path("u1", name)


def test_local_buckets_created_once(tmp_path):
    local = LocalStorage(str(tmp_path), "http://files", ["cvs", "logos"])

    assert local.ensure_buckets() == ["cvs", "logos"]
    assert local.ensure_buckets() == []
    assert os.path.isdir(tmp_path / "logos")


def test_local_upload_overwrites(tmp_path):
    local = LocalStorage(str(tmp_path), "http://files/", ["logos"])

    local.upload("logos", "u1/logo.png", b"old")
    url = local.upload("logos", "u1/logo.png", b"new")

    assert url == "http://files/logos/u1/logo.png"
    assert (tmp_path / "logos" / "u1" / "logo.png").read_bytes() == b"new"


def test_supabase_upload_upserts(monkeypatch):
    calls = []

    def fake_post(url, headers=None, data=None, timeout=None, **kwargs):
        calls.append((url, headers, data))
        return FakeResponse()

    monkeypatch.setattr(storage_module.requests, "post", fake_post)
    remote = SupabaseStorage("https://proj.supabase.co/", "service-key", ["cvs"], 1024)

    url = remote.upload("cvs", "u1/cv.pdf", b"pdf", "application/pdf")

    assert url == "https://proj.supabase.co/storage/v1/object/public/cvs/u1/cv.pdf"
    called_url, headers, data = calls[0]
    assert called_url == "https://proj.supabase.co/storage/v1/object/cvs/u1/cv.pdf"
    assert headers["x-upsert"] == "true"
    assert headers["Authorization"] == "Bearer service-key"
    assert data == b"pdf"


def test_supabase_upload_failure(monkeypatch):
    def failing_post(*args, **kwargs):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(storage_module.requests, "post", failing_post)
    remote = SupabaseStorage("https://proj.supabase.co", "key", ["cvs"], 1024)

    with pytest.raises(ProviderError):
        remote.upload("cvs", "u1/cv.pdf", b"pdf")


def test_supabase_creates_missing_buckets(monkeypatch):
    created = []

    def fake_get(url, headers=None, timeout=None):
        return FakeResponse(200 if url.endswith("/cvs") else 404)

    def fake_post(url, headers=None, json=None, timeout=None):
        created.append(json)
        return FakeResponse()

    monkeypatch.setattr(storage_module.requests, "get", fake_get)
    monkeypatch.setattr(storage_module.requests, "post", fake_post)
    remote = SupabaseStorage("https://proj.supabase.co", "key", ["cvs", "logos"], 1024)

    assert remote.ensure_buckets() == ["logos"]
    assert created == [{"id": "logos", "name": "logos", "public": True, "file_size_limit": 1024}]


def test_init_storage_endpoint(client, storage):
    response = client.get("/api/v1/init-storage")

    assert response.status_code == 200
    assert set(response.json()["created"]) == set(storage.buckets)
    assert client.get("/api/v1/init-storage").json()["created"] == []
