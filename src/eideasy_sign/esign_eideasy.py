#!/usr/bin/env python3
"""
eID Easy e-signature adapter.
Handles document upload/download and signing queue operations.
"""
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Type, TypeVar, Union
from urllib.parse import quote, urlencode

import requests
from pydantic import BaseModel, ValidationError

from .codec import mime_type_for
from .errors import DecodeError, HttpError, IoError, TransportError, UsageError
from .models import (
    CreateQueueRequest,
    CreateQueueResponse,
    DownloadRequest,
    DownloadResponse,
    File,
    PushSignersRequest,
    Signer,
    UploadRequest,
    UploadResponse,
)
from .settings import settings

logger = logging.getLogger(__name__)

PATH_FILE_UPLOAD = "/api/signatures/prepare-files-for-signing"
PATH_FILE_DOWNLOAD = "/api/signatures/download-signed-file"
PATH_SIGNING_QUEUES = "/api/signatures/signing-queues"
PATH_SIGN_EXTERNAL = "/sign_contract_external"

PathLike = Union[str, "os.PathLike[str]"]
ModelT = TypeVar("ModelT", bound=BaseModel)


def push_signers_path(queue_id: str) -> str:
    return f"{PATH_SIGNING_QUEUES}/{quote(queue_id, safe='')}/signers/batch"


def run_queue_path(queue_id: str) -> str:
    return f"{PATH_SIGNING_QUEUES}/{quote(queue_id, safe='')}/run"


class EIDEasyClient:
    """eID Easy API client.

    Every call is a single JSON POST. Document calls authenticate with the
    client id/secret pair in the body; queue calls use the queue secret as a
    bearer token. Nothing is retried.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.get_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.EIDEASY_TIMEOUT
        self.session = session or requests.Session()

    def upload(self, client_id: str, secret: str, paths: Sequence[PathLike]) -> UploadResponse:
        """
        Upload local files for signing.

        Args:
            client_id: eID Easy client id
            secret: eID Easy client secret
            paths: Local files to upload, at least one

        Returns:
            UploadResponse with the provider's doc_id

        Raises:
            UsageError: If no files are given
            IoError: If a file cannot be read
            HttpError: If the API returns a non-success status
            DecodeError: If the response is not the expected JSON
        """
        if not paths:
            raise UsageError("No files specified.")

        request = UploadRequest(
            files=[_read_upload_file(path) for path in paths],
            client_id=client_id,
            secret=secret,
        )
        logger.info(f"Uploading {len(request.files)} file(s) for signing")
        data = self._post(PATH_FILE_UPLOAD, request.model_dump(mode="json", by_alias=True))
        response = _parse(UploadResponse, data)
        logger.info(f"Upload accepted: doc_id={response.doc_id} status={response.status}")
        return response

    def download(
        self, client_id: str, secret: str, doc_id: str, output_path: PathLike
    ) -> DownloadResponse:
        """
        Download a signed document and write it to output_path.

        The file is only written after the response is fully decoded, and the
        write replaces the target in one step, so failures leave no partial file.

        Raises:
            HttpError: If the API returns a non-success status
            DecodeError: If the response JSON or base64 content is malformed
            IoError: If the output file cannot be written
        """
        request = DownloadRequest(doc_id=doc_id, client_id=client_id, secret=secret)
        logger.info(f"Downloading signed file for doc_id={doc_id}")
        data = self._post(PATH_FILE_DOWNLOAD, request.model_dump(mode="json"))
        response = _parse(DownloadResponse, data)
        _write_atomically(output_path, response.signed_file_contents)
        logger.info(f"Saved {len(response.signed_file_contents)} bytes to {os.fspath(output_path)}")
        return response

    def create_queue(
        self, client_id: str, secret: str, doc_id: str, owner_email: str
    ) -> CreateQueueResponse:
        """Create a signing queue with a management page for an uploaded document."""
        request = CreateQueueRequest(
            client_id=client_id,
            secret=secret,
            doc_id=doc_id,
            owner_email=owner_email,
        )
        logger.info(f"Creating signing queue for doc_id={doc_id}")
        data = self._post(PATH_SIGNING_QUEUES, request.model_dump(mode="json"))
        response = _parse(CreateQueueResponse, data)
        logger.info(f"Signing queue created: id={response.id}")
        return response

    def push_signers(self, queue_id: str, queue_secret: str, signers: Iterable[Signer]) -> Any:
        """Append a batch of signers to a queue. Returns the provider's JSON as-is."""
        request = PushSignersRequest(signers=list(signers))
        logger.info(f"Pushing {len(request.signers)} signer(s) to queue {queue_id}")
        return self._post(
            push_signers_path(queue_id),
            request.model_dump(mode="json"),
            bearer=queue_secret,
        )

    def run_queue(self, queue_id: str, queue_secret: str) -> Any:
        """Start the queue's signing workflow. Does not wait for completion."""
        logger.info(f"Running signing queue {queue_id}")
        return self._post(run_queue_path(queue_id), bearer=queue_secret)

    def signing_url(self, client_id: str, doc_id: str) -> str:
        """URL where signers complete an uploaded document."""
        query = urlencode({"client_id": client_id, "doc_id": doc_id})
        return f"{self.base_url}{PATH_SIGN_EXTERNAL}?{query}"

    def _post(
        self,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        bearer: Optional[str] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}
        if bearer is not None:
            headers["Authorization"] = f"Bearer {bearer}"

        logger.debug(f"POST {url}")
        try:
            response = self.session.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"eID Easy request to {url} failed: {e}")
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.error(f"eID Easy API error: HTTP {response.status_code} from {url}")
            raise HttpError(response.status_code, response.text, url=url)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"eID Easy API returned malformed JSON from {url}")
            raise DecodeError(f"Malformed JSON response from {url}: {e}") from e


def _read_upload_file(path: PathLike) -> File:
    file_name = os.path.basename(os.fspath(path))
    if not file_name:
        raise UsageError(f"No file name in path: {os.fspath(path)}")
    try:
        file_content = Path(path).read_bytes()
    except OSError as e:
        raise IoError(f"Cannot read {os.fspath(path)}: {e}", path=os.fspath(path)) from e
    return File(file_content=file_content, file_name=file_name, mime_type=mime_type_for(path))


def _write_atomically(output_path: PathLike, data: bytes) -> None:
    target = Path(output_path)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=target.parent, prefix=f".{target.name}.", suffix=".part", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(data)
        os.chmod(tmp_name, _target_mode(target))
        os.replace(tmp_name, target)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise IoError(f"Cannot write {target}: {e}", path=str(target)) from e


def _target_mode(target: Path) -> int:
    """Mode for the replacement file: keep an existing file's, else honour the umask."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _parse(model: Type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"Unexpected {model.__name__} payload: {e.error_count()} error(s)")
        raise DecodeError(f"Unexpected {model.__name__} payload: {e}") from e


# Global eID Easy client instance, created on first use
_eideasy_client: Optional[EIDEasyClient] = None


def get_eideasy_client(base_url: Optional[str] = None) -> EIDEasyClient:
    """Get the shared client, or a fresh one bound to base_url."""
    global _eideasy_client
    if base_url is not None:
        return EIDEasyClient(base_url=base_url)
    if _eideasy_client is None:
        _eideasy_client = EIDEasyClient()
    return _eideasy_client
