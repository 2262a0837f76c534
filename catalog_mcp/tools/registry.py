"""Static tool catalog: one entry per tool, schema and handler together."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Iterator

from pydantic import BaseModel

from catalog_mcp.catalog.client import CatalogClient
from .input_schema import input_schema_for


class ToolName(str, Enum):
    """Identifiers of every tool the server exposes."""

    # Projects / catalogs
    LIST_CATALOGS = "list_catalogs"
    CREATE_PROJECT = "create_project"
    LIST_PROJECT_MEMBERS = "list_project_members"
    ASSIGN_PROJECT_MEMBER = "assign_project_member"
    UPDATE_MEMBER_ROLE = "update_member_role"
    INVITE_PROJECT_MEMBER = "invite_project_member"
    CREATE_TABLE = "create_table"
    LIST_COLLECTIONS = "list_collections"

    # Addressed by catalog/collection name
    LIST_ATTRIBUTES = "list_attributes"
    LIST_DATA_ASSETS = "list_data_assets"
    UPLOAD_FILE = "upload_file"
    INGEST_DATA = "ingest_data"
    ADD_COLUMN = "add_column"
    ADD_COLUMNS = "add_columns"

    # Tables
    GET_TABLE_SCHEMA = "get_table_schema"
    UPDATE_TABLE = "update_table"
    DELETE_TABLE = "delete_table"

    # Assets
    LIST_ASSETS = "list_assets"
    GET_ASSETS_COUNT = "get_assets_count"
    GET_ASSET_CONTENT = "get_asset_content"
    CREATE_ASSETS = "create_assets"
    DELETE_ASSET = "delete_asset"

    # Columns
    GET_COLUMNS = "get_columns"
    GET_COLUMNS_COUNT = "get_columns_count"
    CREATE_COLUMN = "create_column"
    CREATE_COLUMNS_BULK = "create_columns_bulk"
    UPDATE_COLUMN = "update_column"
    DELETE_COLUMN = "delete_column"

    # Cell values
    GET_ASSET_COLUMN_VALUES = "get_asset_column_values"
    GET_DATA_ASSETS = "get_data_assets"
    UPDATE_CELL_VALUE = "update_cell_value"
    DELETE_ASSET_COLUMN_DATA = "delete_asset_column_data"

    # Export
    EXPORT_JSON = "export_json"
    EXPORT_CSV = "export_csv"
    EXPORT_EXCEL = "export_excel"

    # Files
    GET_TABLE_FILES = "get_table_files"

    # Skills
    LIST_SKILLS = "list_skills"
    GET_SKILL = "get_skill"
    CREATE_SKILL = "create_skill"
    UPDATE_SKILL = "update_skill"
    DELETE_SKILL = "delete_skill"
    RELOAD_SKILLS = "reload_skills"


ToolHandler = Callable[[CatalogClient, Any], Awaitable[str]]


@dataclass(frozen=True)
class ToolSpec:
    """A catalog entry.

    Attributes:
        name: Tool identifier.
        description: One-line description shown to the host.
        arguments: Pydantic model the raw arguments are validated against.
        handler: Coroutine mapping validated arguments to one client call
            and returning the result text.
    """

    name: ToolName
    description: str
    arguments: type[BaseModel]
    handler: ToolHandler = field(compare=False)

    @property
    def input_schema(self) -> dict[str, Any]:
        return input_schema_for(self.arguments)

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name.value,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class ToolRegistry:
    """Ordered mapping of tool name to :class:`ToolSpec`."""

    def __init__(self) -> None:
        self._tools: dict[ToolName, ToolSpec] = {}

    def tool(
        self,
        name: ToolName,
        description: str,
        arguments: type[BaseModel],
    ) -> Callable[[ToolHandler], ToolHandler]:
        """Decorator registering a handler under ``name``."""

        def decorator(handler: ToolHandler) -> ToolHandler:
            if name in self._tools:
                raise ValueError(f"Tool '{name.value}' is already registered")
            self._tools[name] = ToolSpec(
                name=name,
                description=description,
                arguments=arguments,
                handler=handler,
            )
            return handler

        return decorator

    def get(self, name: str) -> ToolSpec | None:
        try:
            return self._tools.get(ToolName(name))
        except ValueError:
            return None

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


registry = ToolRegistry()
