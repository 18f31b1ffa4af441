"""
Integration Test Fixtures.

The real app wired to the test database session.
"""

from collections.abc import AsyncIterator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient, Response
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.core.database import get_db_session


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """
    HTTP client for the app.

    All requests in a test share db_session, so a note created by one
    request is visible to the next without committing.
    """
    from notes_api.main import create_app

    async def _test_session() -> AsyncIterator[AsyncSession]:
        yield db_session

    app = create_app()
    app.dependency_overrides[get_db_session] = _test_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


class ApiAssertions:
    """Status and envelope checks with readable failure messages."""

    @staticmethod
    def assert_ok(response: Response, expected_status: int = 200) -> Any:
        assert response.status_code == expected_status, (
            f"{response.request.method} {response.request.url.path}: "
            f"expected {expected_status}, got {response.status_code}: {response.text}"
        )
        return response.json()

    @staticmethod
    def assert_error(
        response: Response,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        body = ApiAssertions.assert_ok(response, expected_status)
        assert body["success"] is False, body
        assert body["data"] is None, body
        if expected_code is not None:
            assert body["error"]["code"] == expected_code, body["error"]
        return body

    @staticmethod
    def assert_validation_error(response: Response, field: str | None = None) -> dict[str, Any]:
        """400 VAL_REQUEST_INVALID, optionally naming the offending field."""
        body = ApiAssertions.assert_error(response, 400, "VAL_REQUEST_INVALID")
        if field is not None:
            fields = [v["field"] for v in body["error"]["details"]["validation_errors"]]
            assert any(f.endswith(field) for f in fields), fields
        return body


@pytest.fixture
def api() -> ApiAssertions:
    return ApiAssertions()
