"""Async HTTP client for the catalog service REST API."""

import json
import secrets
import time
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Literal

import httpx
import structlog

from catalog_mcp.config import CatalogClientConfig
from .exceptions import UpstreamHTTPError, UpstreamTimeoutError, UpstreamUnavailableError
from .schemas import (
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

logger = structlog.get_logger(__name__)

ResponseType = Literal["json", "text", "bytes"]

REQUEST_SOURCE = "web"
UPLOAD_FIELD = "upload_files"
PLAIN_TEXT_FIELD = "plain_text"


def build_headers(config: CatalogClientConfig) -> dict[str, str]:
    """Build the headers sent with every catalog request.

    Args:
        config: Client connection settings.

    Returns:
        Header mapping; the streaming channel is only present with a session.
    """
    headers = {
        "Authorization": f"ApiKey {config.api_key}",
        "Content-Type": "application/json",
        "Accept": "application/json",
        "x-request-source": REQUEST_SOURCE,
    }
    if config.session_id:
        headers["X-Streaming-Channel"] = config.session_id
    return headers


def _decode_body(response: httpx.Response) -> Any:
    """JSON when the body parses, the raw text otherwise; empty is None."""
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


def _multipart_headers() -> dict[str, str]:
    # Overrides the client-wide JSON content type; httpx reuses this boundary.
    return {"Content-Type": f"multipart/form-data; boundary={secrets.token_hex(16)}"}


class CatalogClient:
    """One method per catalog endpoint, each issuing exactly one request.

    The client keeps no state besides its connection pool. Non-2xx answers
    raise :class:`UpstreamHTTPError`; nothing is retried.
    """

    def __init__(
        self,
        config: CatalogClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Connection settings built once at process start.
            transport: Optional httpx transport, used by tests.
        """
        self.config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            headers=build_headers(config),
            timeout=config.timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        files: list[tuple[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
        response_type: ResponseType = "json",
    ) -> Any:
        """Send one request and decode the response body.

        Raises:
            UpstreamHTTPError: If the service returns a non-2xx status.
            UpstreamTimeoutError: If the request times out.
            UpstreamUnavailableError: If the service can't be reached.
        """
        url = f"{self.config.base_url}{path}"
        start = time.perf_counter()
        try:
            response = await self._http.request(
                method,
                path,
                params=params,
                json=json_body,
                files=files,
                headers=headers,
            )
        except httpx.TimeoutException:
            raise UpstreamTimeoutError(url=url)
        except httpx.RequestError as e:
            raise UpstreamUnavailableError(url=url, reason=str(e))

        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "catalog_request",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        if not response.is_success:
            raise UpstreamHTTPError(
                method=method,
                url=str(response.request.url),
                status_code=response.status_code,
                body=_decode_body(response),
            )

        if response_type == "bytes":
            return response.content
        if response_type == "text":
            return response.text
        return _decode_body(response)

    async def _post_multipart(
        self,
        path: str,
        parts: list[tuple[str, Any]],
        transform: bool,
    ) -> Any:
        return await self._request(
            "POST",
            path,
            params={"transform": transform},
            files=parts,
            headers=_multipart_headers(),
        )

    # Projects / catalogs

    async def list_catalogs(self) -> Any:
        return await self._request("GET", "/projects", params={"limit": 100})

    async def create_project(self, project: ProjectCreate) -> Any:
        return await self._request("POST", "/projects", json_body=project.to_body())

    async def list_project_members(self, project_id: str) -> Any:
        return await self._request("GET", f"/projects/{project_id}/members")

    async def assign_member(self, project_id: str, member: MemberAssign) -> Any:
        return await self._request(
            "POST", f"/projects/{project_id}/members", json_body=member.to_body()
        )

    async def update_member_role(
        self, project_id: str, member_id: str, update: MemberRoleUpdate
    ) -> Any:
        return await self._request(
            "PUT",
            f"/projects/{project_id}/members/{member_id}/role",
            json_body=update.to_body(),
        )

    async def create_invitation(self, project_id: str, invitation: MemberInvitation) -> Any:
        return await self._request(
            "POST",
            f"/projects/{project_id}/members/invitations",
            json_body=invitation.to_body(),
        )

    async def list_collections(self, catalog_id: str) -> Any:
        return await self._request("GET", f"/projects/{catalog_id}/tables", params={"limit": 200})

    async def create_table(self, project_id: str, table: TableCreate) -> Any:
        return await self._request(
            "POST", f"/projects/{project_id}/tables", json_body=table.to_body()
        )

    # Columns and assets addressed by catalog/collection name

    async def list_attributes(self, catalog_name: str, collection_name: str) -> Any:
        return await self._request("GET", f"/columns/{catalog_name}/{collection_name}")

    async def add_column(
        self, catalog_name: str, collection_name: str, column: ColumnDefinition
    ) -> Any:
        return await self._request(
            "POST", f"/columns/{catalog_name}/{collection_name}", json_body=column.to_body()
        )

    async def add_columns(
        self, catalog_name: str, collection_name: str, columns: list[ColumnDefinition]
    ) -> Any:
        return await self._request(
            "POST",
            f"/columns/{catalog_name}/{collection_name}/bulk",
            json_body=[column.to_body() for column in columns],
        )

    async def list_data_assets(self, catalog_name: str, collection_name: str) -> Any:
        return await self._request("GET", f"/assets/{catalog_name}/{collection_name}")

    async def upload_file(
        self,
        catalog_name: str,
        collection_name: str,
        file_path: str,
        transform: bool = True,
    ) -> Any:
        """Upload one local file into a collection.

        The file handle is closed once the request settles.
        """
        path = Path(file_path)
        with path.open("rb") as handle:
            return await self._post_multipart(
                f"/upload/{catalog_name}/{collection_name}",
                [(UPLOAD_FIELD, (path.name, handle))],
                transform,
            )

    async def ingest_data(
        self,
        catalog_name: str,
        collection_name: str,
        text: str,
        transform: bool = True,
    ) -> Any:
        return await self._post_multipart(
            f"/upload/{catalog_name}/{collection_name}",
            [(PLAIN_TEXT_FIELD, (None, text))],
            transform,
        )

    # Tables

    async def get_table_json_schema(self, table_id: str) -> Any:
        return await self._request("GET", f"/tables/{table_id}/json")

    async def update_table(self, table_id: str, update: TableUpdate) -> Any:
        return await self._request("PUT", f"/tables/{table_id}", json_body=update.to_body())

    async def delete_table(self, table_id: str) -> Any:
        return await self._request("DELETE", f"/tables/{table_id}")

    # Assets addressed by table id

    async def list_assets(
        self,
        table_id: str,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        created_at_from: str | None = None,
        created_at_to: str | None = None,
    ) -> Any:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if status:
            params["status"] = status
        if created_at_from:
            params["created_at_from"] = created_at_from
        if created_at_to:
            params["created_at_to"] = created_at_to
        return await self._request("GET", f"/tables/{table_id}/assets", params=params)

    async def get_assets_count(self, table_id: str) -> Any:
        return await self._request("GET", f"/tables/{table_id}/assets/count")

    async def get_asset_content(self, table_id: str, asset_id: str) -> Any:
        return await self._request("GET", f"/tables/{table_id}/assets/{asset_id}")

    async def create_assets(
        self,
        table_id: str,
        file_paths: list[str] | None = None,
        plain_text: str | None = None,
        source_id: str | None = None,
        column_static_data: dict[str, Any] | None = None,
        transform: bool = False,
    ) -> Any:
        """Create assets from local files and/or plain text in one request.

        Every file is attached under the same ``upload_files`` field. All
        opened handles are closed once the request settles.
        """
        with ExitStack() as stack:
            parts: list[tuple[str, Any]] = []
            for file_path in file_paths or []:
                path = Path(file_path)
                handle = stack.enter_context(path.open("rb"))
                parts.append((UPLOAD_FIELD, (path.name, handle)))
            if plain_text:
                parts.append((PLAIN_TEXT_FIELD, (None, plain_text)))
            if source_id:
                parts.append(("source_id", (None, source_id)))
            if column_static_data:
                parts.append(("column_static_data", (None, json.dumps(column_static_data))))
            return await self._post_multipart(f"/tables/{table_id}/assets", parts, transform)

    async def delete_asset(self, table_id: str, asset_id: str) -> Any:
        return await self._request("DELETE", f"/tables/{table_id}/assets/{asset_id}")

    # Columns addressed by table id

    async def get_columns(self, table_id: str) -> Any:
        return await self._request("GET", f"/tables/{table_id}/columns")

    async def get_columns_count(self, table_id: str) -> Any:
        return await self._request("GET", f"/tables/{table_id}/columns/count")

    async def create_column(self, table_id: str, column: ColumnDefinition) -> Any:
        return await self._request(
            "POST", f"/tables/{table_id}/columns", json_body=column.to_body()
        )

    async def create_columns_bulk(self, table_id: str, columns: list[ColumnDefinition]) -> Any:
        return await self._request(
            "POST",
            f"/tables/{table_id}/columns/bulk",
            json_body=[column.to_body() for column in columns],
        )

    async def update_column(self, table_id: str, update: ColumnUpdate) -> Any:
        return await self._request(
            "PUT", f"/tables/{table_id}/columns", json_body=update.to_body()
        )

    async def delete_column(self, table_id: str, column_id: str) -> Any:
        return await self._request("DELETE", f"/tables/{table_id}/columns/{column_id}")

    # Cell values

    async def get_asset_column_values(self, table_id: str) -> Any:
        return await self._request("GET", f"/tables/{table_id}/asset_column")

    async def get_data_assets(self, table_id: str, asset_ids: list[str]) -> Any:
        # httpx repeats the key for list values: asset_ids=a&asset_ids=b
        return await self._request(
            "GET", f"/tables/{table_id}/data_assets", params={"asset_ids": asset_ids}
        )

    async def update_cell_value(
        self,
        table_id: str,
        asset_id: str,
        column_id: str,
        update: CellValueUpdate,
    ) -> Any:
        return await self._request(
            "PUT",
            f"/tables/{table_id}/assets/{asset_id}/columns/{column_id}/value_data",
            json_body=update.to_body(),
        )

    async def delete_asset_column_data(self, table_id: str) -> Any:
        return await self._request("DELETE", f"/tables/{table_id}/asset_column")

    # Export

    async def export_json(self, table_id: str) -> Any:
        return await self._request("GET", f"/tables/{table_id}/export/json")

    async def export_csv(self, table_id: str) -> str:
        return await self._request("GET", f"/tables/{table_id}/export/csv", response_type="text")

    async def export_excel(self, table_id: str) -> bytes:
        return await self._request(
            "GET", f"/tables/{table_id}/export/excel", response_type="bytes"
        )

    # Files

    async def get_table_files(self, table_id: str, limit: int = 5) -> Any:
        return await self._request("GET", f"/tables/{table_id}/files", params={"limit": limit})

    # Skills

    async def list_skills(self, project_id: str) -> Any:
        return await self._request("GET", f"/projects/{project_id}/skills")

    async def get_skill(self, project_id: str, skill_id: str) -> Any:
        return await self._request("GET", f"/projects/{project_id}/skills/{skill_id}")

    async def create_skill(self, project_id: str, skill: SkillCreate) -> Any:
        return await self._request(
            "POST", f"/projects/{project_id}/skills", json_body=skill.to_body()
        )

    async def update_skill(self, project_id: str, skill_id: str, update: SkillUpdate) -> Any:
        return await self._request(
            "PUT", f"/projects/{project_id}/skills/{skill_id}", json_body=update.to_body()
        )

    async def delete_skill(self, project_id: str, skill_id: str) -> Any:
        return await self._request("DELETE", f"/projects/{project_id}/skills/{skill_id}")

    async def reload_skills(self, project_id: str) -> Any:
        return await self._request("POST", f"/projects/{project_id}/skills/reload")
