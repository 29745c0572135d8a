from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ToolInput(BaseModel):
    model_config = ConfigDict(extra='ignore')


class CheckMountInput(ToolInput):
    pass


class ListFilesInput(ToolInput):
    path: str = Field(
        default='',
        description='Path relative to Proton Drive root (e.g., "Documents" or "Projects/2024")',
    )


class ReadFileInput(ToolInput):
    path: str = Field(description='File path relative to Proton Drive root')


class WriteFileInput(ToolInput):
    path: str = Field(description='File path relative to Proton Drive root')
    content: str = Field(description='Text content to write to the file')


class DeleteFileInput(ToolInput):
    path: str = Field(description='Path to delete relative to Proton Drive root')


class CreateFolderInput(ToolInput):
    path: str = Field(description='Folder path relative to Proton Drive root')


class GetFileInfoInput(ToolInput):
    path: str = Field(description='Path to the file or folder')


class ToolSpec(BaseModel):
    name: str
    description: str
    input_schema: dict[str, Any]


class ToolErrorOut(BaseModel):
    code: str
    kind: str
    message: str


class ToolResult(BaseModel):
    ok: bool
    text: Optional[str] = None
    error: Optional[ToolErrorOut] = None


class ApiResponse(BaseModel):
    ok: bool
    message: str
    data: Optional[Any] = None
