"""Tests for the MongoDB::Atlas::ProjectInvitation handlers."""

from unittest.mock import MagicMock, patch

import pytest
from cloudformation_cli_python_lib import HandlerErrorCode, OperationStatus

from conftest import make_request
from mongodb_atlas_projectinvitation import handlers
from mongodb_atlas_projectinvitation.models import ResourceModel
from mongodb_atlas_util.atlas import AtlasApiError
from mongodb_atlas_util.profile import ProfileError

INVITATION = {
    "id": "inv1",
    "groupId": "p1",
    "groupName": "Project 1",
    "username": "jane@example.com",
    "roles": ["GROUP_READ_ONLY"],
    "inviterUsername": "admin@example.com",
    "createdAt": "2024-01-01T00:00:00Z",
    "expiresAt": "2024-01-31T00:00:00Z",
}


def _model(**overrides):
    fields = dict(
        Profile=None,
        ProjectId="p1",
        Id="inv1",
        Username="jane@example.com",
        Roles=["GROUP_READ_ONLY"],
        InviterUsername=None,
        CreatedAt=None,
        ExpiresAt=None,
    )
    fields.update(overrides)
    return ResourceModel(**fields)


@pytest.fixture
def client_factory(atlas_client):
    with patch.object(handlers, "client_from_profile", return_value=atlas_client) as factory:
        yield factory


def _call(handler, model, session=None):
    return handler(session or MagicMock(), make_request(model), {})


def test_delete(client_factory, atlas_client) -> None:
    session = MagicMock()

    event = _call(handlers.delete_handler, _model(), session)

    assert event.status == OperationStatus.SUCCESS
    assert event.resourceModel is None
    atlas_client.delete_project_invitation.assert_called_once_with("p1", "inv1")
    assert len(atlas_client.method_calls) == 1
    client_factory.assert_called_once()
    assert client_factory.call_args[0][0] is session
    assert client_factory.call_args[0][1] == "default"


def test_delete_uses_given_profile(client_factory, atlas_client) -> None:
    _call(handlers.delete_handler, _model(Profile="dev"))

    assert client_factory.call_args[0][1] == "dev"


def test_delete_profile_from_environment(monkeypatch, client_factory) -> None:
    monkeypatch.setenv("MONGODB_ATLAS_PROFILE", "ops")

    _call(handlers.delete_handler, _model())

    assert client_factory.call_args[0][1] == "ops"


@pytest.mark.parametrize("status_code,error_code", [
    (404, HandlerErrorCode.NotFound),
    (401, HandlerErrorCode.InvalidCredentials),
    (500, HandlerErrorCode.ServiceInternalError),
    (None, HandlerErrorCode.InternalFailure),
])
def test_delete_remote_error(status_code, error_code, client_factory, atlas_client) -> None:
    atlas_client.delete_project_invitation.side_effect = AtlasApiError("failed", status_code=status_code)

    event = _call(handlers.delete_handler, _model())

    assert event.status == OperationStatus.FAILED
    assert event.errorCode == error_code


@pytest.mark.parametrize("overrides", [{"ProjectId": None}, {"Id": None}, {"Id": ""}])
def test_delete_missing_required_field(overrides, client_factory, atlas_client) -> None:
    event = _call(handlers.delete_handler, _model(**overrides))

    assert event.status == OperationStatus.FAILED
    assert event.errorCode == HandlerErrorCode.InvalidRequest
    client_factory.assert_not_called()
    assert atlas_client.method_calls == []


def test_profile_failure_is_invalid_request(client_factory) -> None:
    client_factory.side_effect = ProfileError("Unable to read profile default")

    event = _call(handlers.delete_handler, _model())

    assert event.status == OperationStatus.FAILED
    assert event.errorCode == HandlerErrorCode.InvalidRequest
    assert "Unable to read profile" in event.message


def test_create(client_factory, atlas_client) -> None:
    atlas_client.create_project_invitation.return_value = INVITATION

    event = _call(handlers.create_handler, _model(Id=None))

    assert event.status == OperationStatus.SUCCESS
    atlas_client.create_project_invitation.assert_called_once_with("p1", "jane@example.com", ["GROUP_READ_ONLY"])
    model = event.resourceModel
    assert model.Id == "inv1"
    assert model.Profile == "default"
    assert model.InviterUsername == "admin@example.com"
    assert model.ExpiresAt == "2024-01-31T00:00:00Z"


@pytest.mark.parametrize("overrides", [{"Username": None}, {"Roles": []}, {"Roles": None}])
def test_create_missing_required_field(overrides, client_factory) -> None:
    event = _call(handlers.create_handler, _model(**overrides))

    assert event.errorCode == HandlerErrorCode.InvalidRequest
    client_factory.assert_not_called()


def test_create_conflict(client_factory, atlas_client) -> None:
    atlas_client.create_project_invitation.side_effect = AtlasApiError("already invited", status_code=409)

    event = _call(handlers.create_handler, _model())

    assert event.errorCode == HandlerErrorCode.AlreadyExists


def test_read(client_factory, atlas_client) -> None:
    atlas_client.get_project_invitation.return_value = INVITATION

    event = _call(handlers.read_handler, _model(Profile="dev", Username=None, Roles=None))

    assert event.status == OperationStatus.SUCCESS
    atlas_client.get_project_invitation.assert_called_once_with("p1", "inv1")
    assert event.resourceModel.Username == "jane@example.com"
    assert event.resourceModel.Roles == ["GROUP_READ_ONLY"]
    assert event.resourceModel.Profile == "dev"


def test_read_not_found(client_factory, atlas_client) -> None:
    atlas_client.get_project_invitation.side_effect = AtlasApiError("gone", status_code=404)

    event = _call(handlers.read_handler, _model())

    assert event.errorCode == HandlerErrorCode.NotFound


def test_update(client_factory, atlas_client) -> None:
    atlas_client.update_project_invitation.return_value = dict(INVITATION, roles=["GROUP_OWNER"])

    event = _call(handlers.update_handler, _model(Roles=["GROUP_OWNER"]))

    assert event.status == OperationStatus.SUCCESS
    atlas_client.update_project_invitation.assert_called_once_with("p1", "inv1", ["GROUP_OWNER"])
    assert event.resourceModel.Roles == ["GROUP_OWNER"]


def test_list(client_factory, atlas_client) -> None:
    atlas_client.list_project_invitations.return_value = [INVITATION, dict(INVITATION, id="inv2")]

    event = _call(handlers.list_handler, _model(Id=None))

    assert event.status == OperationStatus.SUCCESS
    assert [m.Id for m in event.resourceModels] == ["inv1", "inv2"]


def test_model_deserialize() -> None:
    model = ResourceModel._deserialize({"ProjectId": "p1", "Id": "inv1", "Roles": ["GROUP_READ_ONLY"]})
    assert model.ProjectId == "p1"
    assert model.Roles == ["GROUP_READ_ONLY"]
    assert model.Profile is None
