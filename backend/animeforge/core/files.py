import os
import uuid

from fastapi import UploadFile

from animeforge.core.config import settings


def ensure_media_dirs(root: str = None) -> str:
    root = root or settings.MEDIA_ROOT
    os.makedirs(os.path.join(root, "characters"), exist_ok=True)
    return root


def save_character_image(character_id: int, file: UploadFile, root: str = None) -> str:
    root = ensure_media_dirs(root)
    ext = os.path.splitext(file.filename or "")[1] or ".jpg"
    filename = f"{character_id}_{uuid.uuid4().hex}{ext}"
    path = os.path.join(root, "characters", filename)

    with open(path, "wb") as f:
        f.write(file.file.read())

    return path
