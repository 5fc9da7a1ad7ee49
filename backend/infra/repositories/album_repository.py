from typing import List, Optional
from sqlmodel import Session, select, desc

from domain.models.album import Album
from utils.identifiers import now

class AlbumRepository:
    def __init__(self, session: Session):
        self.session = session

    def find_all(self) -> List[Album]:
        return self.session.exec(select(Album).order_by(desc(Album.updated_at))).all()

    def get_by_id(self, album_id: str) -> Optional[Album]:
        return self.session.get(Album, album_id)

    def add(self, album: Album) -> Album:
        self.session.add(album)
        self.session.flush()
        return album

    def touch(self, album_id: str):
        album = self.get_by_id(album_id)
        if album:
            album.updated_at = now()
            self.session.add(album)

    def delete(self, album: Album):
        self.session.delete(album)
        self.session.flush()
