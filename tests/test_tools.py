"""Tests for the tool catalog and its input schemas."""

import json

import pytest
from pydantic import BaseModel, Field

from catalog_mcp.tools import ToolName, ToolRegistry, registry
from catalog_mcp.tools.input_schema import input_schema_for
from catalog_mcp.tools.schemas import ListAssetsArgs


def _schema(name: ToolName) -> dict:
    return registry.get(name.value).input_schema


class TestRegistry:
    """Tests for the static tool catalog."""

    def test_every_tool_is_registered(self):
        assert {spec.name for spec in registry} == set(ToolName)
        assert len(registry) == 42

    def test_lookup(self):
        spec = registry.get("export_csv")

        assert spec is not None
        assert spec.name is ToolName.EXPORT_CSV
        assert registry.get("exportCsv") is None

    def test_descriptions_are_non_empty(self):
        assert all(spec.description for spec in registry)

    def test_duplicate_registration_fails(self):
        local = ToolRegistry()

        @local.tool(ToolName.LIST_CATALOGS, "x", BaseModel)
        async def first(client, args):
            return ""

        with pytest.raises(ValueError, match="already registered"):

            @local.tool(ToolName.LIST_CATALOGS, "y", BaseModel)
            async def second(client, args):
                return ""


class TestInputSchemas:
    """Tests for the advertised input schemas."""

    @pytest.mark.parametrize("spec", list(registry), ids=lambda spec: spec.name.value)
    def test_schema_is_self_contained_object(self, spec):
        schema = spec.input_schema

        assert schema["type"] == "object"
        assert "properties" in schema
        assert "$ref" not in json.dumps(schema)
        assert "$defs" not in schema

    def test_no_argument_tool(self):
        schema = _schema(ToolName.LIST_CATALOGS)

        assert schema["properties"] == {}
        assert "required" not in schema

    def test_required_fields(self):
        assert _schema(ToolName.GET_COLUMNS)["required"] == ["table_id"]
        assert set(_schema(ToolName.CREATE_PROJECT)["required"]) == {"name", "title", "project_type"}
        assert set(_schema(ToolName.UPDATE_CELL_VALUE)["required"]) == {
            "table_id",
            "asset_id",
            "column_id",
            "value",
        }
        assert set(_schema(ToolName.UPDATE_COLUMN)["required"]) == {"table_id", "id"}

    def test_defaults_are_advertised(self):
        assets = _schema(ToolName.LIST_ASSETS)["properties"]
        assert assets["page"]["default"] == 1
        assert assets["limit"]["default"] == 10
        assert _schema(ToolName.GET_TABLE_FILES)["properties"]["limit"]["default"] == 5
        assert _schema(ToolName.INGEST_DATA)["properties"]["transform"]["default"] is True
        assert _schema(ToolName.UPLOAD_FILE)["properties"]["transform"]["default"] is True
        assert _schema(ToolName.CREATE_ASSETS)["properties"]["transform"]["default"] is False

    def test_optional_fields_collapse_to_plain_type(self):
        status = _schema(ToolName.LIST_ASSETS)["properties"]["status"]

        assert status["type"] == "string"
        assert "anyOf" not in status
        assert "default" not in status

    def test_enums_are_inlined(self):
        data_type = _schema(ToolName.CREATE_COLUMN)["properties"]["data_type"]
        project_type = _schema(ToolName.CREATE_PROJECT)["properties"]["project_type"]

        assert data_type["enum"] == [
            "number",
            "text",
            "boolean",
            "datetime",
            "table",
            "table_markdown",
            "json",
            "markdown",
            "static",
            "agent",
        ]
        assert project_type["enum"] == ["DATA", "ONTOLOGY"]

    def test_nested_column_items(self):
        columns = _schema(ToolName.CREATE_COLUMNS_BULK)["properties"]["columns"]

        assert columns["type"] == "array"
        item = columns["items"]
        assert item["type"] == "object"
        assert set(item["required"]) == {"name", "data_type", "content_location", "scan_ranges"}
        assert item["properties"]["config"]["properties"]["multi_hop"]["type"] == "integer"

    def test_list_of_ids(self):
        asset_ids = _schema(ToolName.GET_DATA_ASSETS)["properties"]["asset_ids"]

        assert asset_ids == {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of asset IDs to query",
        }

    def test_property_named_title_is_kept(self):
        properties = _schema(ToolName.CREATE_PROJECT)["properties"]

        assert "title" in properties
        assert properties["title"]["type"] == "string"

    def test_generated_titles_dropped(self):
        class Example(BaseModel):
            count: int = Field(default=3, description="How many")

        schema = input_schema_for(Example)

        assert schema == {
            "type": "object",
            "properties": {"count": {"type": "integer", "default": 3, "description": "How many"}},
        }


class TestArgumentModels:
    """Tests for argument validation rules."""

    def test_list_assets_bounds(self):
        with pytest.raises(ValueError):
            ListAssetsArgs(table_id="t1", page=0)
        with pytest.raises(ValueError):
            ListAssetsArgs(table_id="t1", limit=0)

    def test_list_assets_defaults(self):
        args = ListAssetsArgs(table_id="t1")

        assert (args.page, args.limit, args.status) == (1, 10, None)
