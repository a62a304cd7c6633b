import pytest

from eideasy_sign.errors import DecodeError
from eideasy_sign.models import (
    CreateQueueRequest,
    DownloadResponse,
    File,
    UploadRequest,
    UploadResponse,
)

DOWNLOAD_PAYLOAD = {
    "signed_file_contents": "aGVsbG8=",
    "signer_country": "EE",
    "signer_idcode": "38001085718",
    "signer_lastname": "JÕEORG",
    "signer_firstname": "JAAK-KRISTJAN",
    "signing_method": "smart-id",
    "status": "OK",
}


def test_upload_request_uses_camel_case_keys():
    req = UploadRequest(
        files=[File(file_content=b"abc", file_name="a.pdf", mime_type="application/pdf")],
        client_id="c",
        secret="s",
    )

    body = req.model_dump(mode="json", by_alias=True)

    assert list(body) == ["files", "clientId", "secret", "containerType"]
    assert body["containerType"] == "pdf"
    assert body["files"] == [{"fileContent": "YWJj", "fileName": "a.pdf", "mimeType": "application/pdf"}]


@pytest.mark.parametrize("payload", [{"status": "OK", "doc_id": "42"}, {"status": "OK", "docId": 42}])
def test_upload_response_accepts_both_doc_id_spellings(payload):
    assert UploadResponse.model_validate(payload).doc_id == "42"


def test_download_response_decodes_content_and_defaults_verification_level():
    res = DownloadResponse.model_validate(DOWNLOAD_PAYLOAD)

    assert res.signed_file_contents == b"hello"
    assert res.verification_level is None


def test_download_response_summary_omits_file_bytes():
    res = DownloadResponse.model_validate({**DOWNLOAD_PAYLOAD, "verification_level": "high"})

    summary = res.summary()

    assert "signed_file_contents" not in summary
    assert summary["signed_file_size"] == 5
    assert summary["verification_level"] == "high"
    assert summary["signer_country"] == "EE"


def test_download_response_rejects_bad_base64():
    with pytest.raises(DecodeError):
        DownloadResponse.model_validate({**DOWNLOAD_PAYLOAD, "signed_file_contents": "%%%"})


def test_create_queue_request_enables_management_page():
    req = CreateQueueRequest(client_id="c", secret="s", doc_id="42", owner_email="o@example.com")

    assert req.model_dump(mode="json") == {
        "client_id": "c",
        "secret": "s",
        "has_management_page": True,
        "doc_id": "42",
        "owner_email": "o@example.com",
    }
