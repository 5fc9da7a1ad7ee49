# テーブルモデルの集約 (SQLModel.metadata への登録用)
from domain.models.album import Album
from domain.models.song import Song
from domain.models.version import Version
from domain.models.attachment import SongFile, SongReference, Comment
