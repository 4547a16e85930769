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


def _list_or_empty(value: Optional[Sequence[Any]], inner_dataclass: Any) -> Optional[Sequence[Any]]:
    # keeps an explicit empty list, which deserialize_list turns into None
    if value is not None and not value:
        return []
    return deserialize_list(value, inner_dataclass)


@dataclass
class ResourceHandlerRequest(BaseResourceHandlerRequest):
    # pylint: disable=invalid-name
    desiredResourceState: Optional["ResourceModel"]
    previousResourceState: Optional["ResourceModel"]


@dataclass
class ResourceModel(BaseModel):
    ApiKeys: Optional["_ApiKeyDefinition"]
    ProjectId: Optional[str]
    ClusterName: Optional[str]
    ManagedNamespaces: Optional[Sequence["_ManagedNamespace"]]
    CustomZoneMappings: Optional[Sequence["_ZoneMapping"]]
    RemoveAllZoneMapping: Optional[bool]

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
            ApiKeys=ApiKeyDefinition._deserialize(json_data.get("ApiKeys")),
            ProjectId=json_data.get("ProjectId"),
            ClusterName=json_data.get("ClusterName"),
            ManagedNamespaces=_list_or_empty(json_data.get("ManagedNamespaces"), ManagedNamespace),
            CustomZoneMappings=_list_or_empty(json_data.get("CustomZoneMappings"), ZoneMapping),
            RemoveAllZoneMapping=json_data.get("RemoveAllZoneMapping"),
        )


# work around possible type aliasing issues when variable has same name as a model
_ResourceModel = ResourceModel


@dataclass
class ApiKeyDefinition(BaseModel):
    PublicKey: Optional[str]
    PrivateKey: Optional[str]

    @classmethod
    def _deserialize(
        cls: Type["_ApiKeyDefinition"],
        json_data: Optional[Mapping[str, Any]],
    ) -> Optional["_ApiKeyDefinition"]:
        if not json_data:
            return None
        return cls(
            PublicKey=json_data.get("PublicKey"),
            PrivateKey=json_data.get("PrivateKey"),
        )


# work around possible type aliasing issues when variable has same name as a model
_ApiKeyDefinition = ApiKeyDefinition


@dataclass
class ManagedNamespace(BaseModel):
    Db: Optional[str]
    Collection: Optional[str]
    CustomShardKey: Optional[str]
    IsCustomShardKeyHashed: Optional[bool]
    IsShardKeyUnique: Optional[bool]

    @classmethod
    def _deserialize(
        cls: Type["_ManagedNamespace"],
        json_data: Optional[Mapping[str, Any]],
    ) -> Optional["_ManagedNamespace"]:
        if not json_data:
            return None
        return cls(
            Db=json_data.get("Db"),
            Collection=json_data.get("Collection"),
            CustomShardKey=json_data.get("CustomShardKey"),
            IsCustomShardKeyHashed=json_data.get("IsCustomShardKeyHashed"),
            IsShardKeyUnique=json_data.get("IsShardKeyUnique"),
        )


# work around possible type aliasing issues when variable has same name as a model
_ManagedNamespace = ManagedNamespace


@dataclass
class ZoneMapping(BaseModel):
    Location: Optional[str]
    Zone: Optional[str]

    @classmethod
    def _deserialize(
        cls: Type["_ZoneMapping"],
        json_data: Optional[Mapping[str, Any]],
    ) -> Optional["_ZoneMapping"]:
        if not json_data:
            return None
        return cls(
            Location=json_data.get("Location"),
            Zone=json_data.get("Zone"),
        )


# work around possible type aliasing issues when variable has same name as a model
_ZoneMapping = ZoneMapping
