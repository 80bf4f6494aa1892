import pytest
from pydantic import ValidationError

from user_registry.models import CreateUserRequest


def test_missing_name_decodes_as_empty():
    assert CreateUserRequest.model_validate_json(b"{}").name == ""


def test_lone_surrogate_name_rejected():
    with pytest.raises(ValidationError):
        CreateUserRequest.model_validate({"name": "\ud800"})

    with pytest.raises(ValidationError):
        CreateUserRequest.model_validate_json(b'{"name":"\\ud800"}')


def test_valid_escapes_kept_verbatim():
    # A proper surrogate pair is a single code point, not an error.
    req = CreateUserRequest.model_validate_json(b'{"name":"\\ud83d\\ude00"}')
    assert req.name == "\U0001f600"


@pytest.mark.parametrize("raw", [b"", b"{not json", b"[1]", b'"x"', b'{"name": 5}', b'{"name": null}'])
def test_malformed_bodies_rejected(raw):
    with pytest.raises(ValidationError):
        CreateUserRequest.model_validate_json(raw)
