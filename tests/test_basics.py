"""Basic unit tests for messenger-sdk package."""

from messenger_sdk import (
    AsyncMessenger,
    Messenger,
    MessengerError,
    BuilderValidationError,
    RemoteApiError,
    TransportError,
    Endpoint,
    __version__,
)
from messenger_sdk.models.profile import ProfileField
from messenger_sdk.models.send import ButtonType, NotificationType, SenderAction
from messenger_sdk.models.webview import HeightRatio, ShareButton


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert Messenger is not None
    assert AsyncMessenger is not None


def test_error_hierarchy():
    assert issubclass(BuilderValidationError, MessengerError)
    assert issubclass(RemoteApiError, MessengerError)
    assert issubclass(TransportError, MessengerError)


def test_error_attributes():
    err = MessengerError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    err_with_details = BuilderValidationError("bad menu", details={"locale": "default"})
    assert err_with_details.code == "builder_validation_error"
    assert err_with_details.details == {"locale": "default"}

    transport_err = TransportError("timed out", status_code=504)
    assert transport_err.code == "transport_error"
    assert transport_err.status_code == 504


def test_wire_constants():
    assert Endpoint.MESSAGES == "me/messages"
    assert Endpoint.MESSENGER_PROFILE == "me/messenger_profile"
    assert ProfileField.CHAT_EXTENSION_HOME_URL == "home_url"
    assert ProfileField.GET_STARTED_BUTTON == "get_started"
    assert ButtonType.CALL == "phone_number"
    assert SenderAction.MARK_SEEN == "mark_seen"
    assert NotificationType.SILENT_PUSH == "SILENT_PUSH"
    assert HeightRatio.TALL == "tall"
    assert ShareButton.HIDE == "hide"
