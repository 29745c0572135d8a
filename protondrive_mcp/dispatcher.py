from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional

from pydantic import ValidationError

from .errors import AccessDenied, InternalError, InvalidArguments, MethodNotFound, ToolError
from .schemas import (
    CheckMountInput,
    CreateFolderInput,
    DeleteFileInput,
    GetFileInfoInput,
    ListFilesInput,
    ReadFileInput,
    ToolErrorOut,
    ToolInput,
    ToolResult,
    ToolSpec,
    WriteFileInput,
)
from .services.file_ops import FileOps

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    input_model: type[ToolInput]
    handler: str


OPERATIONS: dict[str, Operation] = {
    op.name: op
    for op in (
        Operation('check_mount', 'Check if Proton Drive is mounted and accessible', CheckMountInput, '_check_mount'),
        Operation('list_files', 'List files and folders in Proton Drive', ListFilesInput, '_list_files'),
        Operation('read_file', 'Read a text file from Proton Drive', ReadFileInput, '_read_file'),
        Operation('write_file', 'Write or create a file in Proton Drive', WriteFileInput, '_write_file'),
        Operation('delete_file', 'Delete a file or folder from Proton Drive', DeleteFileInput, '_delete_file'),
        Operation('create_folder', 'Create a new folder in Proton Drive', CreateFolderInput, '_create_folder'),
        Operation('get_file_info', 'Get information about a file or folder', GetFileInfoInput, '_get_file_info'),
    )
}


def _to_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _validation_details(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = '.'.join(str(v) for v in err.get('loc', ())) or 'arguments'
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return '; '.join(parts)


class ToolDispatcher:
    """Routes a named operation and its arguments to the confined filesystem.

    Arguments are validated against the operation's input model before any
    path is confined, and paths are confined before any filesystem call.
    ``dispatch`` raises :class:`ToolError` subclasses; ``call`` folds them
    into a :class:`ToolResult`.
    """

    def __init__(self, ops: FileOps):
        self.ops = ops

    @property
    def root(self) -> str:
        return str(self.ops.root)

    def tools(self) -> list[ToolSpec]:
        return [
            ToolSpec(name=op.name, description=op.description, input_schema=op.input_model.model_json_schema())
            for op in OPERATIONS.values()
        ]

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> str:
        operation = OPERATIONS.get(name)
        if operation is None:
            raise MethodNotFound(f'Unknown tool: {name}')

        logger.debug('Dispatching %s', name)
        try:
            params = self._parse(operation, arguments)
            handler: Callable[[Any], Awaitable[str]] = getattr(self, operation.handler)
            return await handler(params)
        except AccessDenied as exc:
            logger.warning('Denied %s: %s', name, exc.message)
            raise
        except ToolError:
            raise
        except Exception as exc:
            logger.exception('Unexpected failure in %s', name)
            raise InternalError(f'Error in {name}: {exc}') from exc

    async def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        try:
            text = await self.dispatch(name, arguments)
        except ToolError as exc:
            return ToolResult(ok=False, error=ToolErrorOut(**exc.to_dict()))
        return ToolResult(ok=True, text=text)

    def _parse(self, operation: Operation, arguments: Optional[Mapping[str, Any]]) -> ToolInput:
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise InvalidArguments(f'Invalid arguments for {operation.name}: expected an object')
        try:
            return operation.input_model.model_validate(dict(arguments))
        except ValidationError as exc:
            raise InvalidArguments(f'Invalid arguments for {operation.name}: {_validation_details(exc)}') from exc

    async def _check_mount(self, _params: CheckMountInput) -> str:
        return _to_json(await asyncio.to_thread(self.ops.check_mount))

    async def _list_files(self, params: ListFilesInput) -> str:
        return _to_json(await asyncio.to_thread(self.ops.list_dir, params.path))

    async def _read_file(self, params: ReadFileInput) -> str:
        return await asyncio.to_thread(self.ops.read_text, params.path)

    async def _write_file(self, params: WriteFileInput) -> str:
        target = await asyncio.to_thread(self.ops.write_text, params.path, params.content)
        return f'Successfully wrote file: {self.ops.display(target)}'

    async def _delete_file(self, params: DeleteFileInput) -> str:
        target = await asyncio.to_thread(self.ops.delete, params.path)
        return f'Successfully deleted: {self.ops.display(target)}'

    async def _create_folder(self, params: CreateFolderInput) -> str:
        target = await asyncio.to_thread(self.ops.mkdir, params.path)
        return f'Successfully created folder: {self.ops.display(target)}'

    async def _get_file_info(self, params: GetFileInfoInput) -> str:
        return _to_json(await asyncio.to_thread(self.ops.info, params.path))


def build_dispatcher(root: str) -> ToolDispatcher:
    return ToolDispatcher(FileOps(root))
