import hashlib
import hmac
import time
from typing import Dict, List, Optional, Tuple
from uuid import uuid4

import requests

from catalog_admin.config import settings
from catalog_admin.utils.logs import get_logger

log = get_logger("media", "MEDIA")

IMAGEKIT_UPLOAD_URL = "https://upload.imagekit.io/api/v1/files/upload"
IMAGEKIT_FILES_URL = "https://api.imagekit.io/v1/files"
# client upload signatures stay valid for 30 minutes
AUTH_EXPIRY_SECONDS = 30 * 60


class MediaError(Exception):
    """Raised when the media host rejects an upload or delete."""
    pass


def optimized_url(
    url: str,
    url_endpoint: str,
    width: Optional[int] = None,
    height: Optional[int] = None,
    quality: int = 80,
    fmt: str = "auto",
) -> str:
    """
    Insert an ImageKit transformation segment right after the URL endpoint:
    https://ik.imagekit.io/shop/products/a.jpg ->
    https://ik.imagekit.io/shop/tr:q-80,f-auto,w-400/products/a.jpg
    URLs not served from the endpoint are returned unchanged.
    """
    endpoint = url_endpoint.rstrip("/")
    if not endpoint or not url.startswith(endpoint + "/"):
        return url
    transformation = f"tr:q-{quality},f-{fmt}"
    if width:
        transformation += f",w-{width}"
    if height:
        transformation += f",h-{height}"
    return f"{endpoint}/{transformation}/{url[len(endpoint) + 1:]}"


class MockMediaAdapter:
    """
    In-memory media host. Upload returns the same shape as ImageKit:
    {url, fileId, name, size, filePath}
    """

    def __init__(self, url_endpoint: str = "https://media.example.test"):
        self.url_endpoint = url_endpoint.rstrip("/")
        self.files: Dict[str, Dict] = {}

    def upload(self, content: bytes, file_name: str, folder: str = None) -> Dict:
        folder = (folder or settings.MEDIA_DEFAULT_FOLDER).strip("/")
        file_id = uuid4().hex
        stored_name = f"{int(time.time() * 1000)}_{file_name}"
        file_path = f"/{folder}/{stored_name}"
        result = {
            "url": f"{self.url_endpoint}{file_path}",
            "fileId": file_id,
            "name": stored_name,
            "size": len(content),
            "filePath": file_path,
        }
        self.files[file_id] = result
        return result

    def upload_many(self, files: List[Tuple[bytes, str]], folder: str = None) -> List[Dict]:
        return [self.upload(content, name, folder) for content, name in files]

    def delete(self, file_id: str) -> None:
        if file_id not in self.files:
            raise MediaError(f"File not found: {file_id}")
        del self.files[file_id]

    def auth_parameters(self) -> Dict:
        token = uuid4().hex
        expire = int(time.time()) + AUTH_EXPIRY_SECONDS
        return {"token": token, "expire": expire, "signature": "mock-" + token}

    def health_check(self) -> bool:
        return True


class ImageKitMediaAdapter:
    """
    ImageKit REST client. Server-side calls authenticate with the private key
    (HTTP basic, empty password); browsers upload directly with the token /
    expire / signature triple from auth_parameters().
    """

    def __init__(
        self,
        public_key: str,
        private_key: str,
        url_endpoint: str,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        self.public_key = public_key
        self.private_key = private_key
        self.url_endpoint = url_endpoint
        self.timeout = timeout
        self.http = session or requests.Session()

    def upload(self, content: bytes, file_name: str, folder: str = None) -> Dict:
        folder = folder or settings.MEDIA_DEFAULT_FOLDER
        try:
            resp = self.http.post(
                IMAGEKIT_UPLOAD_URL,
                auth=(self.private_key, ""),
                files={"file": (file_name, content)},
                data={
                    "fileName": f"{int(time.time() * 1000)}_{file_name}",
                    "folder": folder,
                    "useUniqueFileName": "true",
                },
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            log.error(f"upload of {file_name!r} failed: {e}")
            raise MediaError("Failed to upload image") from e
        body = resp.json()
        return {
            "url": body["url"],
            "fileId": body["fileId"],
            "name": body["name"],
            "size": body["size"],
            "filePath": body["filePath"],
        }

    def upload_many(self, files: List[Tuple[bytes, str]], folder: str = None) -> List[Dict]:
        return [self.upload(content, name, folder) for content, name in files]

    def delete(self, file_id: str) -> None:
        try:
            resp = self.http.delete(
                f"{IMAGEKIT_FILES_URL}/{file_id}",
                auth=(self.private_key, ""),
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            log.error(f"delete of {file_id!r} failed: {e}")
            raise MediaError("Failed to delete image") from e

    def auth_parameters(self, token: str = None, expire: int = None) -> Dict:
        """signature = HMAC-SHA1(private_key, token + expire), hex encoded."""
        token = token or str(uuid4())
        expire = expire or int(time.time()) + AUTH_EXPIRY_SECONDS
        signature = hmac.new(
            self.private_key.encode("utf-8"),
            f"{token}{expire}".encode("utf-8"),
            hashlib.sha1,
        ).hexdigest()
        return {"token": token, "expire": expire, "signature": signature}

    def health_check(self) -> bool:
        return bool(self.public_key and self.private_key and self.url_endpoint)


_mock_adapter = MockMediaAdapter()


def get_media_adapter():
    """FastAPI dependency: the configured media host."""
    if settings.MEDIA_BACKEND == "imagekit":
        return ImageKitMediaAdapter(
            settings.IMAGEKIT_PUBLIC_KEY,
            settings.IMAGEKIT_PRIVATE_KEY,
            settings.IMAGEKIT_URL_ENDPOINT,
            timeout=settings.MEDIA_REQUEST_TIMEOUT_SECONDS,
        )
    return _mock_adapter
