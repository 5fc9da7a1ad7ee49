import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from app.services.album_app_service import AlbumAppService
from app.services.attachment_app_service import AttachmentAppService
from app.services.song_app_service import SongAppService
from domain.errors import NotFoundError
from domain.mutations import LyricsChanged, OriginChanged, ProgressChanged
from models import Album, Song, Version, SongFile

def test_create_album(client: TestClient):
    response = client.post("/api/albums", json={"name": "My Album"})
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "My Album"
    assert data["id"]

def test_get_albums_most_recent_first(client: TestClient, session: Session):
    service = AlbumAppService(session)
    older = service.create_album("Older")
    newer = service.create_album("Newer")
    # 古い方に楽曲を追加すると更新日時が新しくなる
    SongAppService(session).create_song(older.id, "Fresh")

    data = client.get("/api/albums").json()
    assert [a["name"] for a in data][:2] == ["Older", "Newer"]
    assert data[0]["songs"][0]["title"] == "Fresh"

def test_get_album_detail(client: TestClient, session: Session, album):
    song = SongAppService(session).create_song(album.id)
    AttachmentAppService(session).add_comment(song.id, "Dev", "hello")

    response = client.get(f"/api/albums/{album.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Demo"
    assert len(data["songs"]) == 1
    assert data["songs"][0]["comments"][0]["text"] == "hello"
    assert data["songs"][0]["versions"][0]["changes"] == "Song created"
    assert data["songs"][0]["files"] == []

def test_get_album_not_found(client: TestClient):
    assert client.get("/api/albums/missing").status_code == 404

def test_rename_album(client: TestClient, album):
    response = client.put(f"/api/albums/{album.id}", json={"name": "Renamed"})
    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"

def test_delete_album_cascades(client: TestClient, session: Session, album):
    songs = SongAppService(session)
    song = songs.create_song(album.id)
    AttachmentAppService(session).add_file(song.id, {"name": "x.wav", "type": "audio", "url": "https://f/x"})
    other_album = AlbumAppService(session).create_album("Other")
    keeper = songs.create_song(other_album.id)

    response = client.delete(f"/api/albums/{album.id}")
    assert response.status_code == 200

    assert session.get(Album, album.id) is None
    assert session.exec(select(Song).where(Song.album_id == album.id)).all() == []
    assert session.exec(select(Version).where(Version.song_id == song.id)).all() == []
    assert session.exec(select(SongFile).where(SongFile.song_id == song.id)).all() == []
    assert session.get(Song, keeper.id) is not None

def test_duplicate_album(session: Session, album):
    songs = SongAppService(session)
    first = songs.create_song(album.id, "First")
    songs.update_fields(first.id, [LyricsChanged("la"), ProgressChanged("Mixing"), OriginChanged("Jam")])
    songs.create_song(album.id, "Second")
    AttachmentAppService(session).add_comment(first.id, "Dev", "not copied")

    copy = AlbumAppService(session).duplicate_album(album.id)

    assert copy.name == "Copy of Demo"
    copied = songs.get_songs(copy.id)
    assert [s.title for s in copied] == ["First", "Second"]
    assert [s.display_order for s in copied] == [0, 1]
    assert copied[0].lyrics == "la"
    assert copied[0].progress == "Mixing"
    assert copied[0].origin == "Jam"
    assert AttachmentAppService(session).get_comments(copied[0].id) == []

    detail = songs.get_song_detail(copied[0].id)
    assert [v["changes"] for v in detail["versions"]] == [
        "Updated lyrics, notes, progress, origin",
        "Song created",
    ]

def test_duplicate_missing_album(session: Session):
    with pytest.raises(NotFoundError):
        AlbumAppService(session).duplicate_album("missing")
