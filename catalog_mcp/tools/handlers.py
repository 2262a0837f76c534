"""Tool handlers: remap validated arguments onto one client call each.

Importing this module populates :data:`catalog_mcp.tools.registry.registry`.
"""

from typing import TypeVar

from pydantic import BaseModel

from catalog_mcp.catalog.client import CatalogClient
from catalog_mcp.catalog.schemas import (
    CellValueUpdate,
    ColumnDefinition,
    ColumnUpdate,
    MemberAssign,
    MemberInvitation,
    MemberRoleUpdate,
    ProjectCreate,
    SkillCreate,
    SkillUpdate,
    TableCreate,
    TableUpdate,
)
from .formatting import compact, excel_preview, inline, pretty
from .registry import ToolName, registry
from .schemas import (
    AddColumnArgs,
    AddColumnsArgs,
    AssetRef,
    AssignMemberArgs,
    CatalogRef,
    CollectionRef,
    ColumnRef,
    CreateAssetsArgs,
    CreateColumnArgs,
    CreateColumnsBulkArgs,
    CreateProjectArgs,
    CreateSkillArgs,
    CreateTableArgs,
    DataAssetsArgs,
    IngestDataArgs,
    InviteMemberArgs,
    ListAssetsArgs,
    NoArguments,
    ProjectRef,
    SkillRef,
    TableFilesArgs,
    TableRef,
    UpdateCellValueArgs,
    UpdateColumnArgs,
    UpdateMemberRoleArgs,
    UpdateSkillArgs,
    UpdateTableArgs,
    UploadFileArgs,
)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def _payload(args: BaseModel, model: type[PayloadT], *address: str) -> PayloadT:
    """Strip addressing fields from ``args`` and rebuild the request body.

    Only fields the caller actually set are carried over, so partial
    updates stay partial.
    """
    return model.model_validate(args.model_dump(exclude=set(address), exclude_unset=True))


# Projects / catalogs


@registry.tool(ToolName.LIST_CATALOGS, "List all available data catalogs", NoArguments)
async def list_catalogs(client: CatalogClient, args: NoArguments) -> str:
    return pretty(await client.list_catalogs())


@registry.tool(ToolName.CREATE_PROJECT, "Create a new data catalog project", CreateProjectArgs)
async def create_project(client: CatalogClient, args: CreateProjectArgs) -> str:
    project = await client.create_project(_payload(args, ProjectCreate))
    return f"Project created successfully: {pretty(project)}"


@registry.tool(
    ToolName.LIST_PROJECT_MEMBERS, "List the members of a project and their roles", ProjectRef
)
async def list_project_members(client: CatalogClient, args: ProjectRef) -> str:
    return pretty(await client.list_project_members(args.project_id))


@registry.tool(
    ToolName.ASSIGN_PROJECT_MEMBER, "Add an existing user to a project with a role", AssignMemberArgs
)
async def assign_project_member(client: CatalogClient, args: AssignMemberArgs) -> str:
    result = await client.assign_member(args.project_id, _payload(args, MemberAssign, "project_id"))
    return f"Member assigned: {compact(result)}"


@registry.tool(
    ToolName.UPDATE_MEMBER_ROLE, "Change the role of a project member", UpdateMemberRoleArgs
)
async def update_member_role(client: CatalogClient, args: UpdateMemberRoleArgs) -> str:
    result = await client.update_member_role(
        args.project_id, args.member_id, MemberRoleUpdate(role=args.role)
    )
    return f"Member role updated: {compact(result)}"


@registry.tool(
    ToolName.INVITE_PROJECT_MEMBER, "Invite someone to a project by email", InviteMemberArgs
)
async def invite_project_member(client: CatalogClient, args: InviteMemberArgs) -> str:
    result = await client.create_invitation(
        args.project_id, _payload(args, MemberInvitation, "project_id")
    )
    return f"Invitation created: {compact(result)}"


@registry.tool(
    ToolName.CREATE_TABLE, "Create a new table within a specific catalog", CreateTableArgs
)
async def create_table(client: CatalogClient, args: CreateTableArgs) -> str:
    table = await client.create_table(args.project_id, _payload(args, TableCreate))
    return f"Table created successfully: {pretty(table)}"


@registry.tool(
    ToolName.LIST_COLLECTIONS,
    "List all collections (master data tables) within a specific catalog",
    CatalogRef,
)
async def list_collections(client: CatalogClient, args: CatalogRef) -> str:
    return pretty(await client.list_collections(args.catalog_id))


# By catalog/collection name


@registry.tool(
    ToolName.LIST_ATTRIBUTES,
    "List attributes and schema for a specific collection (by catalog/collection name)",
    CollectionRef,
)
async def list_attributes(client: CatalogClient, args: CollectionRef) -> str:
    return pretty(await client.list_attributes(args.catalog_name, args.collection_name))


@registry.tool(
    ToolName.LIST_DATA_ASSETS,
    "List all data assets (uploaded files) in a specific collection (by catalog/collection name)",
    CollectionRef,
)
async def list_data_assets(client: CatalogClient, args: CollectionRef) -> str:
    return pretty(await client.list_data_assets(args.catalog_name, args.collection_name))


@registry.tool(
    ToolName.UPLOAD_FILE,
    "Upload a local file into a catalog collection for master data processing",
    UploadFileArgs,
)
async def upload_file(client: CatalogClient, args: UploadFileArgs) -> str:
    result = await client.upload_file(
        args.catalog_name, args.collection_name, args.file_path, transform=args.transform
    )
    return f"Upload successful: {compact(result)}"


@registry.tool(
    ToolName.INGEST_DATA,
    "Ingest plain text data into a catalog collection for master data processing",
    IngestDataArgs,
)
async def ingest_data(client: CatalogClient, args: IngestDataArgs) -> str:
    result = await client.ingest_data(
        args.catalog_name, args.collection_name, args.text, transform=args.transform
    )
    return f"Ingestion successful: {compact(result)}"


@registry.tool(
    ToolName.ADD_COLUMN,
    "Add a new column to a catalog collection (by catalog/collection name)",
    AddColumnArgs,
)
async def add_column(client: CatalogClient, args: AddColumnArgs) -> str:
    column = _payload(args, ColumnDefinition, "catalog_name", "collection_name")
    result = await client.add_column(args.catalog_name, args.collection_name, column)
    return f"Column added successfully: {compact(result)}"


@registry.tool(
    ToolName.ADD_COLUMNS,
    "Add multiple columns to a catalog collection (bulk, by catalog/collection name)",
    AddColumnsArgs,
)
async def add_columns(client: CatalogClient, args: AddColumnsArgs) -> str:
    result = await client.add_columns(args.catalog_name, args.collection_name, args.columns)
    return f"Bulk columns added successfully: {compact(result)}"


# Tables


@registry.tool(ToolName.GET_TABLE_SCHEMA, "Get the JSON schema of a table by its ID", TableRef)
async def get_table_schema(client: CatalogClient, args: TableRef) -> str:
    return pretty(await client.get_table_json_schema(args.table_id))


@registry.tool(
    ToolName.UPDATE_TABLE,
    "Update table metadata (name, description, status, table_type)",
    UpdateTableArgs,
)
async def update_table(client: CatalogClient, args: UpdateTableArgs) -> str:
    table = await client.update_table(args.table_id, _payload(args, TableUpdate, "table_id"))
    return f"Table updated: {compact(table)}"


@registry.tool(ToolName.DELETE_TABLE, "Delete a table and all its associated assets", TableRef)
async def delete_table(client: CatalogClient, args: TableRef) -> str:
    await client.delete_table(args.table_id)
    return "Table deleted successfully"


# Assets


@registry.tool(
    ToolName.LIST_ASSETS,
    "List assets (uploaded files) in a table with pagination and optional filters",
    ListAssetsArgs,
)
async def list_assets(client: CatalogClient, args: ListAssetsArgs) -> str:
    assets = await client.list_assets(
        args.table_id,
        page=args.page,
        limit=args.limit,
        status=args.status,
        created_at_from=args.created_at_from,
        created_at_to=args.created_at_to,
    )
    return pretty(assets)


@registry.tool(ToolName.GET_ASSETS_COUNT, "Get the count of assets in a table", TableRef)
async def get_assets_count(client: CatalogClient, args: TableRef) -> str:
    count = await client.get_assets_count(args.table_id)
    return f"Assets count: {inline(count)}"


@registry.tool(
    ToolName.GET_ASSET_CONTENT, "Get the content of a specific asset (file) as base64", AssetRef
)
async def get_asset_content(client: CatalogClient, args: AssetRef) -> str:
    return pretty(await client.get_asset_content(args.table_id, args.asset_id))


@registry.tool(
    ToolName.CREATE_ASSETS,
    "Create assets in a table by uploading local files and/or providing plain text content",
    CreateAssetsArgs,
)
async def create_assets(client: CatalogClient, args: CreateAssetsArgs) -> str:
    result = await client.create_assets(
        args.table_id,
        file_paths=args.file_paths,
        plain_text=args.plain_text,
        source_id=args.source_id,
        column_static_data=args.column_static_data,
        transform=args.transform,
    )
    return f"Assets created: {compact(result)}"


@registry.tool(ToolName.DELETE_ASSET, "Delete a specific asset from a table", AssetRef)
async def delete_asset(client: CatalogClient, args: AssetRef) -> str:
    await client.delete_asset(args.table_id, args.asset_id)
    return "Asset deleted successfully"


# Columns


@registry.tool(ToolName.GET_COLUMNS, "Get all columns for a table by its ID", TableRef)
async def get_columns(client: CatalogClient, args: TableRef) -> str:
    return pretty(await client.get_columns(args.table_id))


@registry.tool(ToolName.GET_COLUMNS_COUNT, "Get the count of columns in a table", TableRef)
async def get_columns_count(client: CatalogClient, args: TableRef) -> str:
    count = await client.get_columns_count(args.table_id)
    return f"Columns count: {inline(count)}"


@registry.tool(
    ToolName.CREATE_COLUMN, "Create a single column in a table by table ID", CreateColumnArgs
)
async def create_column(client: CatalogClient, args: CreateColumnArgs) -> str:
    column = await client.create_column(args.table_id, _payload(args, ColumnDefinition, "table_id"))
    return f"Column created: {compact(column)}"


@registry.tool(
    ToolName.CREATE_COLUMNS_BULK,
    "Create multiple columns in a table by table ID (bulk)",
    CreateColumnsBulkArgs,
)
async def create_columns_bulk(client: CatalogClient, args: CreateColumnsBulkArgs) -> str:
    result = await client.create_columns_bulk(args.table_id, args.columns)
    return f"Bulk columns created: {compact(result)}"


@registry.tool(ToolName.UPDATE_COLUMN, "Update a column in a table", UpdateColumnArgs)
async def update_column(client: CatalogClient, args: UpdateColumnArgs) -> str:
    column = await client.update_column(args.table_id, _payload(args, ColumnUpdate, "table_id"))
    return f"Column updated: {compact(column)}"


@registry.tool(ToolName.DELETE_COLUMN, "Delete a column from a table", ColumnRef)
async def delete_column(client: CatalogClient, args: ColumnRef) -> str:
    await client.delete_column(args.table_id, args.column_id)
    return "Column deleted successfully"


# Cell values


@registry.tool(
    ToolName.GET_ASSET_COLUMN_VALUES,
    "Get all asset-column values (extracted data) for a table",
    TableRef,
)
async def get_asset_column_values(client: CatalogClient, args: TableRef) -> str:
    return pretty(await client.get_asset_column_values(args.table_id))


@registry.tool(
    ToolName.GET_DATA_ASSETS, "Get column values for specific assets in a table", DataAssetsArgs
)
async def get_data_assets(client: CatalogClient, args: DataAssetsArgs) -> str:
    return pretty(await client.get_data_assets(args.table_id, args.asset_ids))


@registry.tool(
    ToolName.UPDATE_CELL_VALUE,
    "Update a specific cell value (asset + column intersection)",
    UpdateCellValueArgs,
)
async def update_cell_value(client: CatalogClient, args: UpdateCellValueArgs) -> str:
    result = await client.update_cell_value(
        args.table_id, args.asset_id, args.column_id, CellValueUpdate(value=args.value)
    )
    return f"Cell value updated: {compact(result)}"


@registry.tool(
    ToolName.DELETE_ASSET_COLUMN_DATA, "Delete all asset-column data for a table", TableRef
)
async def delete_asset_column_data(client: CatalogClient, args: TableRef) -> str:
    await client.delete_asset_column_data(args.table_id)
    return "Asset column data deleted successfully"


# Export


@registry.tool(ToolName.EXPORT_JSON, "Export table data as JSON", TableRef)
async def export_json(client: CatalogClient, args: TableRef) -> str:
    return pretty(await client.export_json(args.table_id))


@registry.tool(ToolName.EXPORT_CSV, "Export table data as CSV", TableRef)
async def export_csv(client: CatalogClient, args: TableRef) -> str:
    return await client.export_csv(args.table_id)


@registry.tool(ToolName.EXPORT_EXCEL, "Export table data as Excel (xlsx)", TableRef)
async def export_excel(client: CatalogClient, args: TableRef) -> str:
    return excel_preview(await client.export_excel(args.table_id))


# Files


@registry.tool(ToolName.GET_TABLE_FILES, "List files for a specific table", TableFilesArgs)
async def get_table_files(client: CatalogClient, args: TableFilesArgs) -> str:
    return pretty(await client.get_table_files(args.table_id, limit=args.limit))


# Skills


@registry.tool(ToolName.LIST_SKILLS, "List the skills defined in a project", ProjectRef)
async def list_skills(client: CatalogClient, args: ProjectRef) -> str:
    return pretty(await client.list_skills(args.project_id))


@registry.tool(ToolName.GET_SKILL, "Get a skill with its Markdown content and references", SkillRef)
async def get_skill(client: CatalogClient, args: SkillRef) -> str:
    return pretty(await client.get_skill(args.project_id, args.skill_id))


@registry.tool(ToolName.CREATE_SKILL, "Create a new skill in a project", CreateSkillArgs)
async def create_skill(client: CatalogClient, args: CreateSkillArgs) -> str:
    skill = await client.create_skill(args.project_id, _payload(args, SkillCreate, "project_id"))
    return f"Skill created: {pretty(skill)}"


@registry.tool(ToolName.UPDATE_SKILL, "Update a skill in a project", UpdateSkillArgs)
async def update_skill(client: CatalogClient, args: UpdateSkillArgs) -> str:
    skill = await client.update_skill(
        args.project_id, args.skill_id, _payload(args, SkillUpdate, "project_id", "skill_id")
    )
    return f"Skill updated: {pretty(skill)}"


@registry.tool(ToolName.DELETE_SKILL, "Delete a skill from a project", SkillRef)
async def delete_skill(client: CatalogClient, args: SkillRef) -> str:
    await client.delete_skill(args.project_id, args.skill_id)
    return "Skill deleted successfully"


@registry.tool(
    ToolName.RELOAD_SKILLS, "Reload the enabled skills of a project into the agent runtime", ProjectRef
)
async def reload_skills(client: CatalogClient, args: ProjectRef) -> str:
    result = await client.reload_skills(args.project_id)
    return f"Skills reloaded: {compact(result)}"
