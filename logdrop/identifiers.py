import re
from uuid import uuid4

UUID_PATTERN = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")

ALLOWED_SUFFIXES = (".txt", ".log", ".dmp")


def generate_id() -> str:
    return str(uuid4())


def is_valid_id(value: str) -> bool:
    return UUID_PATTERN.fullmatch(value) is not None


def validate_filename(filename: str) -> bool:
    return filename.endswith(ALLOWED_SUFFIXES)
