from __future__ import annotations


class NottoError(Exception):
    pass


class PathError(NottoError, ValueError):
    pass


class NoteAlreadyExists(NottoError, FileExistsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Note {name} already exists.")
        self.name = name


class FileError(NottoError):
    def __init__(self, message: str) -> None:
        super().__init__(f"File Error: {message}")
        self.message = message
