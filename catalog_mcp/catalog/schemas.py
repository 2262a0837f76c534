"""Pydantic schemas for request bodies sent to the catalog service."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CatalogPayload(BaseModel):
    """Base for request bodies.

    Unknown fields are rejected so typos fail before reaching the service.
    """

    model_config = ConfigDict(extra="forbid")

    def to_body(self) -> dict:
        """Serialize the fields the caller supplied, skipping empty optionals."""
        return self.model_dump(mode="json", exclude_none=True)


class PartialUpdate(CatalogPayload):
    """Base for update bodies: only explicitly set fields are sent."""

    def to_body(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True)


class ProjectType(str, Enum):
    """Kind of catalog project."""

    DATA = "DATA"
    ONTOLOGY = "ONTOLOGY"


class ColumnDataType(str, Enum):
    """Data types a column can hold."""

    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    TABLE = "table"
    TABLE_MARKDOWN = "table_markdown"
    JSON = "json"
    MARKDOWN = "markdown"
    STATIC = "static"
    AGENT = "agent"


class ProjectCreate(CatalogPayload):
    name: str = Field(..., description='The slug of the project title (e.g., "my-project")')
    title: str = Field(..., description="The display title of the project")
    description: str | None = Field(default=None, description="Optional description of the project")
    project_type: ProjectType = Field(..., description="Type of project (DATA or ONTOLOGY)")
    domain: str | None = Field(default=None, description="Optional vertical domain or department")
    tags: list[str] | None = Field(default=None, description="Optional data tags")


class TableCreate(CatalogPayload):
    project_id: str = Field(..., description="The UUID of the catalog (project)")
    name: str = Field(..., description="Name of the table")
    table_type: str | None = Field(default=None, description="Type of table (default: TABLE)")
    description: str | None = Field(default=None, description="Optional description of the table")
    status: str | None = Field(default=None, description="Status of the table (default: DRAFT)")
    model_transform: str | None = Field(
        default=None, description="AI transform model (FLASH, BASIC, MAX; default: FLASH)"
    )
    language: str | None = Field(default=None, description="Language of the content (default: English)")
    model_reasoning: str | None = Field(default=None, description="Optional reasoning model for BASIC")


class TableUpdate(PartialUpdate):
    name: str | None = Field(default=None, description="New name for the table")
    description: str | None = Field(default=None, description="New description for the table")
    table_type: str | None = Field(default=None, description="New table type")
    status: str | None = Field(default=None, description="New status")


class ColumnConfig(CatalogPayload):
    multi_hop: int | None = Field(
        default=None, description="Reasoning level (0: Fast, 1: Normal, 2: High, 3: Max)"
    )


class ColumnDefinition(CatalogPayload):
    """A column to create on a table.

    ``agent_id`` must accompany ``data_type=agent``; the service enforces it.
    """

    name: str = Field(..., description="Unique name for the column (alphanumeric, underscores)")
    data_type: ColumnDataType = Field(..., description="Data type of the column values")
    content_location: str = Field(
        ..., description="Visual alignment (top-left, center, top-right, etc.; usually top-left)"
    )
    scan_ranges: list[str] = Field(
        ..., description='Pages or ranges to scan (e.g., ["all"], ["1"], ["1-5"])'
    )
    prompt_template: str | None = Field(default=None, description="AI task description or static value")
    agent_id: str | None = Field(default=None, description="Required if data_type is agent")
    config: ColumnConfig | None = None


class ColumnUpdate(PartialUpdate):
    id: str = Field(..., description="The column ID to update")
    name: str | None = Field(default=None, description="New column name")
    data_type: ColumnDataType | None = Field(default=None, description="New data type")
    content_location: str | None = Field(default=None, description="New alignment")
    scan_ranges: list[str] | None = Field(default=None, description="New pages or ranges to scan")
    prompt_template: str | None = Field(default=None, description="New AI task description")
    agent_id: str | None = Field(default=None, description="New agent ID")
    config: ColumnConfig | None = None


class CellValueUpdate(CatalogPayload):
    value: str = Field(..., description="The new value for the cell")


class SkillCreate(CatalogPayload):
    name: str = Field(..., description="Skill name")
    description: str | None = Field(default=None, description="Short description of the skill")
    skill_md_content: str | None = Field(default=None, description="Skill instructions in Markdown")
    is_enabled: bool | None = Field(default=None, description="Whether the skill is active")


class SkillUpdate(PartialUpdate):
    name: str | None = Field(default=None, description="New skill name")
    description: str | None = Field(default=None, description="New description")
    skill_md_content: str | None = Field(default=None, description="New Markdown instructions")
    is_enabled: bool | None = Field(default=None, description="Enable or disable the skill")


class MemberAssign(CatalogPayload):
    user_id: str = Field(..., description="The UUID of the user to add")
    role: str = Field(..., description="Role to grant in the project")


class MemberRoleUpdate(CatalogPayload):
    role: str = Field(..., description="New role for the member")


class MemberInvitation(CatalogPayload):
    email: str = Field(..., description="Email address to invite")
    role: str = Field(..., description="Role granted once the invitation is accepted")
