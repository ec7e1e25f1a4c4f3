"""Google Sheets client used to log file names to the tracking spreadsheet."""

import json
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

import httpx

from app.utils.jwt_manager import GOOGLE_TOKEN_URI, create_service_account_assertion
from app.utils.logging_config import logger

SHEETS_API_URL = "https://sheets.googleapis.com/v4/spreadsheets"


class SheetsError(RuntimeError):
    """Raised when Google rejects the token exchange or the append call."""


def sheet_timestamp(now: datetime, timezone_name: str) -> str:
    """Local wall-clock time in the day/month/year form the sheet already uses."""
    return now.astimezone(ZoneInfo(timezone_name)).strftime("%d/%m/%Y, %I:%M:%S %p").lower()


class GoogleSheetsClient:
    def __init__(
        self,
        service_account_json: str,
        spreadsheet_id: str,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._credentials = json.loads(service_account_json)
        self._spreadsheet_id = spreadsheet_id
        self._http = http_client or httpx.AsyncClient(timeout=30)

    async def get_access_token(self) -> str:
        assertion = create_service_account_assertion(self._credentials)
        response = await self._http.post(
            self._credentials.get("token_uri", GOOGLE_TOKEN_URI),
            data={
                "grant_type": "urn:ietf:params:oauth:grant-type:jwt-bearer",
                "assertion": assertion,
            },
        )
        if response.is_error:
            raise SheetsError(f"Failed to get access token: {response.text}")
        return response.json()["access_token"]

    async def append_row(self, values: list[Any], sheet_range: str) -> dict:
        access_token = await self.get_access_token()
        response = await self._http.post(
            f"{SHEETS_API_URL}/{self._spreadsheet_id}/values/{sheet_range}:append",
            params={"valueInputOption": "USER_ENTERED"},
            headers={"Authorization": f"Bearer {access_token}"},
            json={"values": [values]},
        )
        if response.is_error:
            raise SheetsError(f"Failed to append to sheet: {response.text}")
        logger.info(f"Appended row to spreadsheet {self._spreadsheet_id}")
        return response.json()

    async def aclose(self) -> None:
        await self._http.aclose()
