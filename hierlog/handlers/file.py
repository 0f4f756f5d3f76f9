"""File handler: appends formatted lines to a file."""
from __future__ import annotations

import os
from typing import IO, Any, Optional

from hierlog.handlers.base import BaseHandler

_OPEN_FLAGS = {
    "a": os.O_WRONLY | os.O_CREAT | os.O_APPEND,
    "w": os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    "x": os.O_WRONLY | os.O_CREAT | os.O_EXCL,
}


class FileHandler(BaseHandler):
    """
    Writes each message, followed by ``newline``, to ``file_name``.

    The file is opened on the first emitted message with ``file_flags``
    ("a", "w" or "x"), ``file_encoding`` and permission bits ``file_mode``.
    """

    default_level = "DEBUG"
    file_name: str = "./logging.log"
    file_flags: str = "a"
    file_encoding: Optional[str] = "utf-8"
    file_mode: int = 0o660
    newline: str = "\n"

    def __init__(self, file_name: Optional[str] = None, **config: Any) -> None:
        self._file: Optional[IO[str]] = None
        if file_name is not None:
            config["file_name"] = file_name
        super().__init__(**config)

    def __repr__(self) -> str:
        return f"<FileHandler {self.file_name} ({self.level or 'ALL'})>"

    def _open(self) -> IO[str]:
        try:
            flags = _OPEN_FLAGS[self.file_flags]
        except KeyError:
            raise ValueError(
                f"Unsupported file_flags {self.file_flags!r}; expected one of {sorted(_OPEN_FLAGS)}"
            ) from None
        directory = os.path.dirname(os.path.abspath(self.file_name))
        os.makedirs(directory, exist_ok=True)
        fd = os.open(self.file_name, flags, self.file_mode)
        return os.fdopen(fd, "w", encoding=self.file_encoding, newline="")

    def emit(self, context) -> None:
        if self._file is None:
            self._file = self._open()
        self._file.write(self.formatter.format(context) + self.newline)
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
