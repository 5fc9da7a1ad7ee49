from typing import List, Optional
from sqlmodel import Session, select, desc

from domain.models.attachment import SongFile, SongReference, Comment

class AttachmentRepository:
    """楽曲に付随するファイル・リファレンス・コメント"""

    def __init__(self, session: Session):
        self.session = session

    # --- Files ---
    def get_file(self, file_id: str) -> Optional[SongFile]:
        return self.session.get(SongFile, file_id)

    def find_files(self, song_id: str) -> List[SongFile]:
        return self.session.exec(
            select(SongFile).where(SongFile.song_id == song_id).order_by(SongFile.created_at)
        ).all()

    # --- References ---
    def get_reference(self, reference_id: str) -> Optional[SongReference]:
        return self.session.get(SongReference, reference_id)

    def find_references(self, song_id: str) -> List[SongReference]:
        return self.session.exec(
            select(SongReference).where(SongReference.song_id == song_id).order_by(SongReference.created_at)
        ).all()

    # --- Comments ---
    def get_comment(self, comment_id: str) -> Optional[Comment]:
        return self.session.get(Comment, comment_id)

    def find_comments(self, song_id: str) -> List[Comment]:
        return self.session.exec(
            select(Comment).where(Comment.song_id == song_id).order_by(desc(Comment.created_at))
        ).all()

    def add(self, entity):
        self.session.add(entity)
        self.session.flush()
        return entity

    def delete(self, entity):
        self.session.delete(entity)
        self.session.flush()

    def delete_for_song(self, song_id: str):
        for model in (SongFile, SongReference, Comment):
            existing = self.session.exec(select(model).where(model.song_id == song_id)).all()
            for e in existing:
                self.session.delete(e)
        self.session.flush()
