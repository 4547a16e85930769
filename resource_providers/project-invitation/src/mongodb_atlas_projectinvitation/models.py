# DO NOT modify this file by hand, changes will be overwritten
import sys
from dataclasses import dataclass
from inspect import getmembers, isclass
from typing import (
    AbstractSet,
    Any,
    Generic,
    Mapping,
    MutableMapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
)

from cloudformation_cli_python_lib.interface import (
    BaseModel,
    BaseResourceHandlerRequest,
)
from cloudformation_cli_python_lib.recast import recast_object
from cloudformation_cli_python_lib.utils import deserialize_list

T = TypeVar("T")


def set_or_none(value: Optional[Sequence[T]]) -> Optional[AbstractSet[T]]:
    if value:
        return set(value)
    return None


@dataclass
class ResourceHandlerRequest(BaseResourceHandlerRequest):
    # pylint: disable=invalid-name
    desiredResourceState: Optional["ResourceModel"]
    previousResourceState: Optional["ResourceModel"]


@dataclass
class ResourceModel(BaseModel):
    Profile: Optional[str]
    ProjectId: Optional[str]
    Id: Optional[str]
    Username: Optional[str]
    Roles: Optional[Sequence[str]]
    InviterUsername: Optional[str]
    CreatedAt: Optional[str]
    ExpiresAt: Optional[str]

    @classmethod
    def _deserialize(
        cls: Type["_ResourceModel"],
        json_data: Optional[Mapping[str, Any]],
    ) -> Optional["_ResourceModel"]:
        if not json_data:
            return None
        dataclasses = {n: o for n, o in getmembers(sys.modules[__name__]) if isclass(o)}
        recast_object(cls, json_data, dataclasses)
        return cls(
            Profile=json_data.get("Profile"),
            ProjectId=json_data.get("ProjectId"),
            Id=json_data.get("Id"),
            Username=json_data.get("Username"),
            Roles=json_data.get("Roles"),
            InviterUsername=json_data.get("InviterUsername"),
            CreatedAt=json_data.get("CreatedAt"),
            ExpiresAt=json_data.get("ExpiresAt"),
        )


# work around possible type aliasing issues when variable has same name as a model
_ResourceModel = ResourceModel
