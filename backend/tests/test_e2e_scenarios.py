import json
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from models import Song, Version, SongFile, SongReference, Comment

# --- Scenario 1: Demo album lifecycle ---

def test_e2e_demo_album_history(client: TestClient, session: Session):
    """
    Scenario: Create album "Demo" -> create song -> rename -> upload audio -> restore the rename
    """
    album = client.post("/api/albums", json={"name": "Demo"}).json()

    song = client.post(f"/api/albums/{album['id']}/songs", json={"title": "Untitled"}).json()
    assert song["display_order"] == 0
    versions = client.get(f"/api/songs/{song['id']}/versions").json()
    assert len(versions) == 1
    assert versions[0]["changes"] == "Song created"

    data = client.patch(f"/api/songs/{song['id']}", json={"title": "Take One"}).json()
    assert data["title"] == "Take One"
    assert len(data["versions"]) == 2
    rename = data["versions"][0]
    assert rename["changes"] == "Updated title"
    assert json.loads(rename["snapshot"])["title"] == "Untitled"

    response = client.post(f"/api/songs/{song['id']}/files", json={
        "name": "take-one.wav", "type": "audio", "url": "https://files.example/take-one.wav",
        "mime_type": "audio/wav", "size": 2048,
    })
    assert response.status_code == 200
    versions = client.get(f"/api/songs/{song['id']}/versions").json()
    assert len(versions) == 3
    assert versions[0]["changes"] == "Uploaded audio file"

    # 2番目の履歴 (タイトル変更) に戻す
    restored = client.post(f"/api/songs/{song['id']}/versions/{rename['id']}/restore").json()
    assert restored["title"] == "Untitled"
    assert len(restored["versions"]) == 4
    assert restored["versions"][0]["changes"] == "Restored from version history"
    # ファイルは復元の対象外
    assert len(restored["files"]) == 1

# --- Scenario 2: Collaborative editing with attribution fixes ---

def test_e2e_collaborative_editing(client: TestClient):
    """
    Scenario: Two editors work on lyrics/notes -> one entry is re-attributed -> earlier lyrics restored
    """
    album = client.post("/api/albums", json={"name": "Sessions"}).json()
    song = client.post(f"/api/albums/{album['id']}/songs", json={}).json()
    sid = song["id"]

    client.patch(f"/api/songs/{sid}", json={"lyrics": "A", "user": "Dev"})
    client.patch(f"/api/songs/{sid}", json={"lyrics": "B", "user": "Andy"})
    client.patch(f"/api/songs/{sid}", json={"notes": "double the chorus", "user": "Khal"})
    data = client.patch(f"/api/songs/{sid}", json={"lyrics": "C", "user": "User"}).json()
    assert data["lyrics_user"] == "User"
    assert data["notes_user"] == "Khal"

    # 最後の編集は実は Andy によるもの
    latest = data["versions"][0]
    fixed = client.patch(f"/api/versions/{latest['id']}/user", json={"user": "Andy"}).json()
    assert fixed["user"] == "Andy"
    assert fixed["snapshot"] == latest["snapshot"]

    versions = client.get(f"/api/songs/{sid}/versions").json()
    # lyrics "A" -> "B" の履歴 (変更前 = "A")
    target = next(v for v in versions if v["snapshot"] and json.loads(v["snapshot"])["lyrics"] == "A")
    restored = client.post(f"/api/songs/{sid}/versions/{target['id']}/restore").json()

    assert restored["lyrics"] == "A"
    # notes も復元時点の値に戻る
    assert restored["notes"] == ""
    assert len(restored["versions"]) == len(versions) + 1
    assert [v["id"] for v in restored["versions"][1:]] == [v["id"] for v in versions]

# --- Scenario 3: Album management ---

def test_e2e_album_management(client: TestClient, session: Session):
    """
    Scenario: Build tracklist -> reorder -> duplicate -> delete original
    """
    album = client.post("/api/albums", json={"name": "LP"}).json()
    ids = [client.post(f"/api/albums/{album['id']}/songs", json={"title": t}).json()["id"] for t in ("Intro", "Single", "Outro")]
    client.post(f"/api/songs/{ids[1]}/references", json={"type": "youtube", "title": "Vibe", "url": "https://y/1"})
    client.post(f"/api/songs/{ids[1]}/comments", json={"user": "Dev", "text": "hit"})

    client.put(f"/api/albums/{album['id']}/songs/order", json={"song_ids": [ids[1], ids[0], ids[2]]})

    copy = client.post(f"/api/albums/{album['id']}/duplicate").json()
    copy_titles = [s["title"] for s in client.get(f"/api/albums/{copy['id']}/songs").json()]
    assert copy_titles == ["Single", "Intro", "Outro"]

    assert client.delete(f"/api/albums/{album['id']}").status_code == 200
    for model in (Version, SongFile, SongReference, Comment):
        assert session.exec(select(model).where(model.song_id.in_(ids))).all() == []
    assert session.exec(select(Song).where(Song.id.in_(ids))).all() == []
    assert len(client.get(f"/api/albums/{copy['id']}").json()["songs"]) == 3
