# cloakroom/ticket/tokens.py
import secrets

# No 0/O or 1/I: tokens get read aloud and typed by hand
ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def generate_token(length: int = 8) -> str:
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def normalize_token(raw: str | None) -> str:
    return (raw or "").strip().upper()


def is_well_formed(token: str) -> bool:
    return 4 <= len(token) <= 32 and token.isascii() and token.isalnum()
