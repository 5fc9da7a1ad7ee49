class AlbumerError(Exception):
    """ドメイン層の基底例外"""

class NotFoundError(AlbumerError):
    """参照された楽曲・履歴などが存在しない"""

class InvalidStateError(AlbumerError):
    """現在の状態では実行できない操作 (スナップショットの無い履歴の復元など)"""

class StorageError(AlbumerError):
    """永続化層の失敗。リトライ後も解消しなかったもの"""
