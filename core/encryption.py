from cryptography.fernet import Fernet, InvalidToken
import base64
import hashlib
from core import config


def is_enabled() -> bool:
    return bool(config.ENCRYPTION_SECRET)


def _get_cipher():
    # Any length secret -> 32-byte urlsafe base64 key for Fernet
    key = hashlib.sha256(config.ENCRYPTION_SECRET.encode()).digest()
    return Fernet(base64.urlsafe_b64encode(key))


def encrypt_token(token: str) -> str:
    return _get_cipher().encrypt(token.encode()).decode()


def decrypt_token(token: str) -> str | None:
    try:
        return _get_cipher().decrypt(token.encode()).decode()
    except InvalidToken:
        return None
