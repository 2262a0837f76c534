"""Pydantic argument models, one per tool.

Each model is both the validator for incoming arguments and the source of
the tool's advertised input schema.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from catalog_mcp.catalog.schemas import (
    ColumnDefinition,
    ColumnUpdate,
    MemberAssign,
    MemberInvitation,
    ProjectCreate,
    SkillCreate,
    SkillUpdate,
    TableCreate,
    TableUpdate,
)


class ToolArguments(BaseModel):
    """Base for tool arguments; unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


class NoArguments(ToolArguments):
    pass


class ProjectRef(ToolArguments):
    project_id: str = Field(..., description="The UUID of the project")


class CatalogRef(ToolArguments):
    catalog_id: str = Field(..., description="The UUID of the catalog (project)")


class TableRef(ToolArguments):
    table_id: str = Field(..., description="The UUID of the table")


class CollectionRef(ToolArguments):
    catalog_name: str = Field(..., description="Name of the catalog")
    collection_name: str = Field(..., description="Name of the collection")


# Projects


class CreateProjectArgs(ProjectCreate):
    pass


class CreateTableArgs(TableCreate):
    pass


class AssignMemberArgs(MemberAssign):
    project_id: str = Field(..., description="The UUID of the project")


class UpdateMemberRoleArgs(ProjectRef):
    member_id: str = Field(..., description="The UUID of the project member")
    role: str = Field(..., description="New role for the member")


class InviteMemberArgs(MemberInvitation):
    project_id: str = Field(..., description="The UUID of the project")


# By catalog/collection name


class IngestDataArgs(CollectionRef):
    text: str = Field(..., description="Content to ingest")
    transform: bool = Field(
        default=True, description="Whether to trigger AI transformation immediately (default: true)"
    )


class UploadFileArgs(CollectionRef):
    file_path: str = Field(..., description="Path of a local file to upload")
    transform: bool = Field(
        default=True, description="Whether to trigger AI transformation immediately (default: true)"
    )


class AddColumnArgs(ColumnDefinition):
    catalog_name: str = Field(..., description="Name of the catalog")
    collection_name: str = Field(..., description="Name of the collection")


class AddColumnsArgs(CollectionRef):
    columns: list[ColumnDefinition] = Field(..., description="Columns to add")


# Tables


class UpdateTableArgs(TableUpdate):
    table_id: str = Field(..., description="The UUID of the table")


# Assets


class ListAssetsArgs(TableRef):
    page: int = Field(default=1, ge=1, description="Page number (default: 1)")
    limit: int = Field(default=10, ge=1, description="Items per page (default: 10)")
    status: str | None = Field(default=None, description="Only return assets with this status")
    created_at_from: str | None = Field(
        default=None, description="Only return assets created at or after this ISO timestamp"
    )
    created_at_to: str | None = Field(
        default=None, description="Only return assets created at or before this ISO timestamp"
    )


class AssetRef(TableRef):
    asset_id: str = Field(..., description="The UUID of the asset")


class CreateAssetsArgs(TableRef):
    file_paths: list[str] | None = Field(
        default=None, description="Paths of local files to upload, one asset per file"
    )
    plain_text: str | None = Field(default=None, description="Plain text content to ingest as an asset")
    source_id: str | None = Field(default=None, description="Optional source identifier")
    column_static_data: dict[str, Any] | None = Field(
        default=None, description="Optional static data for columns (key-value pairs)"
    )
    transform: bool = Field(
        default=False, description="Whether to trigger AI transformation (default: false)"
    )


# Columns


class CreateColumnArgs(ColumnDefinition):
    table_id: str = Field(..., description="The UUID of the table")


class CreateColumnsBulkArgs(TableRef):
    columns: list[ColumnDefinition] = Field(..., description="Columns to create")


class UpdateColumnArgs(ColumnUpdate):
    table_id: str = Field(..., description="The UUID of the table")


class ColumnRef(TableRef):
    column_id: str = Field(..., description="The UUID of the column")


# Cell values


class DataAssetsArgs(TableRef):
    asset_ids: list[str] = Field(..., description="List of asset IDs to query")


class UpdateCellValueArgs(TableRef):
    asset_id: str = Field(..., description="The UUID of the asset (row)")
    column_id: str = Field(..., description="The UUID of the column")
    value: str = Field(..., description="The new value for the cell")


# Files


class TableFilesArgs(TableRef):
    limit: int = Field(default=5, ge=1, description="Max number of files to return (default: 5)")


# Skills


class SkillRef(ProjectRef):
    skill_id: str = Field(..., description="The UUID of the skill")


class CreateSkillArgs(SkillCreate):
    project_id: str = Field(..., description="The UUID of the project")


class UpdateSkillArgs(SkillUpdate):
    project_id: str = Field(..., description="The UUID of the project")
    skill_id: str = Field(..., description="The UUID of the skill")
