ENCODING = "utf-8"


def save_text(path: str, content: str) -> None:
    """Write ``content`` to ``path``, replacing any previous content.

    Newlines are written untranslated so every symbol survives a round trip.

    :param str path: Destination file path.
    :param str content: Text to write.
    :returns: None
    :rtype: None
    :raises OSError: If the file cannot be written.
    """
    with open(path, "w", encoding=ENCODING, newline="") as f:
        f.write(content)


def load_text(path: str) -> str:
    """Read the whole content of ``path``.

    :param str path: Source file path.
    :returns: File content.
    :rtype: str
    :raises OSError: If the file cannot be read.
    """
    with open(path, "r", encoding=ENCODING, newline="") as f:
        return f.read()


def save_bytes(path: str, data: bytes) -> None:
    """Binary counterpart of :func:`save_text` for packed payloads."""
    with open(path, "wb") as f:
        f.write(data)


def load_bytes(path: str) -> bytes:
    """Binary counterpart of :func:`load_text` for packed payloads."""
    with open(path, "rb") as f:
        return f.read()
