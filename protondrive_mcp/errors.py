from __future__ import annotations

METHOD_NOT_FOUND = 'MethodNotFound'
INTERNAL_ERROR = 'InternalError'


class ToolError(Exception):
    code = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {'code': self.code, 'kind': self.kind, 'message': self.message}


class AccessDenied(ToolError):
    pass


class FilesystemError(ToolError):
    @classmethod
    def wrap(cls, prefix: str, exc: BaseException) -> FilesystemError:
        message = f'{prefix}: {_describe(exc)}'
        if isinstance(exc, FileNotFoundError):
            return NotFound(message)
        return cls(message)


class NotFound(FilesystemError):
    pass


class InvalidArguments(ToolError):
    pass


class MethodNotFound(ToolError):
    code = METHOD_NOT_FOUND


class InternalError(ToolError):
    pass


def _describe(exc: BaseException) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        if exc.filename is not None:
            return f'{exc.strerror}: {exc.filename}'
        return exc.strerror
    return str(exc) or type(exc).__name__
