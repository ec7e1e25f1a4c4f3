"""Storage Gateway over the Supabase recordings bucket."""

from typing import Optional

from supabase import AsyncClient

from app.utils.logging_config import logger


class StorageGateway:
    """Upload, download and list objects of one Supabase Storage bucket."""

    def __init__(self, client: AsyncClient, bucket: str):
        self._client = client
        self.bucket = bucket

    async def upload(
        self, path: str, content: bytes, content_type: Optional[str] = None
    ) -> str:
        """
        Uploads a file to the bucket and returns its path.
        """
        file_options = {"upsert": "true"}
        if content_type:
            file_options["content-type"] = content_type
        try:
            await self._client.storage.from_(self.bucket).upload(
                path=path,
                file=content,
                file_options=file_options,
            )
            logger.info(f"File uploaded to storage at path: {path}")
        except Exception as exc:
            logger.error(f"Failed to upload file to storage: {exc}", exc_info=True)
            raise
        return path

    async def download(self, path: str) -> bytes:
        try:
            return await self._client.storage.from_(self.bucket).download(path)
        except Exception as exc:
            logger.error(f"Failed to download {path} from storage: {exc}")
            raise

    async def list_names(self, prefix: str) -> list[str]:
        """Object names directly under a prefix."""
        entries = await self._client.storage.from_(self.bucket).list(prefix)
        return [entry["name"] for entry in entries]
