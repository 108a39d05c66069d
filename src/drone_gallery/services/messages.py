"""User-facing status messages."""

LOAD_FAILED = "사진 목록을 불러올 수 없습니다. 서버 상태를 확인해주세요."
UPLOADING = "업로드 중..."
UPLOAD_FAILED = "업로드에 실패했습니다."
SELECT_FILE_FIRST = "파일을 먼저 선택해주세요."
SELECT_FIELDS_FIRST = "위치와 공정을 선택해주세요."
DELETE_CONFIRM = "정말로 이 사진(ID: {photo_id})을 삭제하시겠습니까?"
DELETED = "사진이 삭제되었습니다."
DELETE_FAILED = "사진 삭제에 실패했습니다."
EMPTY_GALLERY = "아직 업로드된 사진이 없습니다."


def delete_confirmation(photo_id: int) -> str:
    """Return the confirmation prompt shown before deleting a photo."""
    return DELETE_CONFIRM.format(photo_id=photo_id)
