"""
Request and response models for the eID Easy signatures API.

Each endpoint gets its own model. Upload files are sent in camelCase, the other
endpoints use the provider's snake_case field names.
"""
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_serializer, field_validator

from .codec import decode_base64, encode_base64

CONTAINER_TYPE_PDF = "pdf"


class File(BaseModel):
    """A single document inside an upload request."""

    file_content: bytes = Field(serialization_alias="fileContent")
    file_name: str = Field(serialization_alias="fileName")
    mime_type: str = Field(serialization_alias="mimeType")

    @field_serializer("file_content")
    def _serialize_content(self, value: bytes) -> str:
        return encode_base64(value)


class UploadRequest(BaseModel):
    files: List[File]
    client_id: str = Field(serialization_alias="clientId")
    secret: str
    container_type: str = Field(default=CONTAINER_TYPE_PDF, serialization_alias="containerType")


class UploadResponse(BaseModel):
    status: str
    doc_id: str = Field(validation_alias=AliasChoices("doc_id", "docId"))

    @field_validator("doc_id", mode="before")
    @classmethod
    def _doc_id_as_text(cls, value: Any) -> Any:
        # Some accounts get numeric doc ids back.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class DownloadRequest(BaseModel):
    doc_id: str
    client_id: str
    secret: str


class DownloadResponse(BaseModel):
    signed_file_contents: bytes
    signer_country: str
    signer_idcode: str
    signer_lastname: str
    signer_firstname: str
    signing_method: str
    status: str
    verification_level: Optional[str] = None

    @field_validator("signed_file_contents", mode="before")
    @classmethod
    def _decode_contents(cls, value: Any) -> Any:
        if isinstance(value, str):
            return decode_base64(value)
        return value

    def summary(self) -> Dict[str, Any]:
        """Everything except the file bytes, which are replaced by their size."""
        data = self.model_dump(exclude={"signed_file_contents"})
        data["signed_file_size"] = len(self.signed_file_contents)
        return data


class CreateQueueRequest(BaseModel):
    client_id: str
    secret: str
    has_management_page: bool = True
    doc_id: str
    owner_email: str


class CreateQueueResponse(BaseModel):
    id: int
    signing_queue_secret: str
    management_page_url: str


class Signer(BaseModel):
    email: str
    name: str


class PushSignersRequest(BaseModel):
    signers: List[Signer]
