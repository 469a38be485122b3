# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""PostgREST (Supabase) client for the enrollment table.

Requests:
- GET    /rest/v1/enrollments?select=*,students(...),courses(...)&order=created_at.desc
- PATCH  /rest/v1/enrollments?id=in.(a,b,c)
- DELETE /rest/v1/enrollments?id=eq.a

A PATCH with an id=in filter is a single statement on the server, which is
what makes a cascaded transition all-or-nothing.

Example:
    >>> async with PostgrestEnrollmentStore(get_settings().store) as store:
    ...     enrollments = await store.list_enrollments()
"""

import logging
from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any, Self

import httpx
from pydantic import ValidationError

from roster.core.config.settings import RemoteStoreSettings
from roster.domains.enrollment.models import Enrollment
from roster.infrastructure.store.base import (
    EnrollmentStore,
    StoreError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)

STUDENT_COLUMNS = "id,first_name,last_name,email,phone,address,eircode,dob"
COURSE_COLUMNS = "id,name"
SELECT_WITH_RELATIONS = f"*,students({STUDENT_COLUMNS}),courses({COURSE_COLUMNS})"


def _quote(value: str) -> str:
    # PostgREST list syntax needs reserved characters double-quoted
    if any(ch in value for ch in ',()".: '):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


def _to_wire(values: Mapping[str, Any]) -> dict[str, Any]:
    """Convert Enrollment field values to JSON column values."""
    payload: dict[str, Any] = {}
    for name, value in values.items():
        field_info = Enrollment.model_fields.get(name)
        column = field_info.alias if field_info and field_info.alias else name
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, date):
            value = value.isoformat()
        payload[column] = value
    return payload


class PostgrestEnrollmentStore(EnrollmentStore):
    """EnrollmentStore backed by a PostgREST endpoint.

    Attributes:
        table: Enrollment table name.
    """

    def __init__(
        self,
        settings: RemoteStoreSettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            settings: Remote store configuration.
            client: Optional preconfigured HTTP client (tests inject one
                with a mock transport).
        """
        self._settings = settings
        self.table = settings.table
        self._client = client or httpx.AsyncClient(
            base_url=settings.rest_url,
            headers=settings.auth_headers,
            timeout=settings.timeout,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def _request(self, method: str, operation: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, f"/{self.table}", **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = self._error_detail(e.response)
            logger.error("%s failed (%d): %s", operation, e.response.status_code, detail)
            raise StoreError(
                f"{operation} failed: {detail}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error("Connection error during %s: %s", operation, e)
            raise StoreUnavailableError(f"Remote store not available: {e}") from e
        return response

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(data, dict):
            return str(data.get("message") or data.get("details") or data)
        return str(data)

    async def list_enrollments(self) -> list[Enrollment]:
        response = await self._request(
            "GET",
            "List enrollments",
            params={"select": SELECT_WITH_RELATIONS, "order": "created_at.desc"},
        )
        try:
            enrollments = [Enrollment.model_validate(row) for row in response.json()]
        except (ValidationError, ValueError) as e:
            raise StoreError(f"Malformed enrollment data: {e}") from e

        logger.debug("Fetched %d enrollments", len(enrollments))
        return enrollments

    async def update_enrollments(
        self,
        ids: frozenset[str],
        values: Mapping[str, Any],
    ) -> None:
        if not ids:
            return
        id_list = ",".join(_quote(i) for i in sorted(ids))
        await self._request(
            "PATCH",
            "Update enrollments",
            params={"id": f"in.({id_list})"},
            json=_to_wire(values),
            headers={"Prefer": "return=minimal"},
        )
        logger.debug("Updated %d enrollments: %s", len(ids), sorted(values))

    async def delete_enrollment(self, enrollment_id: str) -> None:
        await self._request(
            "DELETE",
            "Delete enrollment",
            params={"id": f"eq.{enrollment_id}"},
            headers={"Prefer": "return=minimal"},
        )
        logger.debug("Deleted enrollment %s", enrollment_id)
