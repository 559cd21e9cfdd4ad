import hashlib


def hash_password(password: str) -> str:
    """
    Unsalted hex SHA-256 of the UTF-8 password, any length.

    Digests stay comparable with rows already in the store.
    """
    return hashlib.sha256(password.encode("utf-8")).hexdigest()
