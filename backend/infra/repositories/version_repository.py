from typing import List, Optional
from sqlmodel import Session, select, desc, func

from domain.models.version import Version

class VersionRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, version_id: str) -> Optional[Version]:
        return self.session.get(Version, version_id)

    def find_by_song(self, song_id: str) -> List[Version]:
        """新しい順 (同時刻は後から追加した方が先)"""
        query = (
            select(Version)
            .where(Version.song_id == song_id)
            .order_by(desc(Version.created_at), desc(Version.sequence))
        )
        return self.session.exec(query).all()

    def latest_for_song(self, song_id: str) -> Optional[Version]:
        query = (
            select(Version)
            .where(Version.song_id == song_id)
            .order_by(desc(Version.sequence))
            .limit(1)
        )
        return self.session.exec(query).first()

    def count_for_song(self, song_id: str) -> int:
        return self.session.exec(
            select(func.count()).select_from(Version).where(Version.song_id == song_id)
        ).one()

    def add(self, version: Version) -> Version:
        self.session.add(version)
        self.session.flush()
        return version

    def update_user(self, version: Version, user: str) -> Version:
        version.user = user
        self.session.add(version)
        self.session.flush()
        return version

    def delete_for_song(self, song_id: str):
        # 楽曲削除時のカスケード以外では使わない
        existing = self.session.exec(select(Version).where(Version.song_id == song_id)).all()
        for v in existing:
            self.session.delete(v)
        self.session.flush()
