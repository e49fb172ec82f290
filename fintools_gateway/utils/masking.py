"""Display masking for secret material"""

MASK_CHAR = "•"
MAX_MASK_LENGTH = 64


def mask_secret(value: str) -> str:
    """Replace every character with a bullet, capped at 64 bullets"""
    return MASK_CHAR * min(len(value or ""), MAX_MASK_LENGTH)
