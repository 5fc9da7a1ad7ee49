# 制作ステージ (UIのプルダウンと同じ順序)
PROGRESS_STAGES = (
    "Not Started",
    "In Progress",
    "Recording",
    "Mixing",
    "Mastering",
    "Complete",
)
DEFAULT_PROGRESS = PROGRESS_STAGES[0]

FILE_TYPES = ("logic", "audio")
REFERENCE_SOURCES = ("spotify", "youtube")

# 履歴の自動付与ラベル
SYSTEM_USER = "System"
LABEL_SONG_CREATED = "Song created"
LABEL_REFERENCE_ADDED = "Added reference"
LABEL_RESTORED = "Restored from version history"
COMMENT_SONG_CREATED = "Initial creation"

DEFAULT_SONG_TITLE = "Untitled"

def file_uploaded_label(file_type: str) -> str:
    return f"Uploaded {file_type} file"
