"""
Translation and reconciliation of managed namespaces and custom zone mappings

Atlas exposes no bulk replace for managed namespaces, only add-one and remove-one. Removals are therefore planned
against the remote state first and then applied one at a time, collecting a result per namespace so partial failures
can be reported precisely.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from mongodb_atlas_util.atlas import DUPLICATE_MANAGED_NAMESPACE, AtlasApiError, AtlasClient

from .models import ManagedNamespace, ZoneMapping

LOG = logging.getLogger(__name__)

NamespaceKey = Tuple[str, str]


class NamespaceOutcome(Enum):
    ADDED = "ADDED"
    ALREADY_PRESENT = "ALREADY_PRESENT"
    REMOVED = "REMOVED"
    NOT_PRESENT = "NOT_PRESENT"
    FAILED = "FAILED"


@dataclass
class NamespaceResult:
    key: NamespaceKey
    outcome: NamespaceOutcome
    error: Optional[AtlasApiError] = None

    @property
    def name(self) -> str:
        return namespace_name(self.key)


@dataclass
class RemovalPlan:
    to_remove: List[ManagedNamespace]
    not_present: List[NamespaceKey]


def namespace_key(namespace: ManagedNamespace) -> NamespaceKey:
    return (namespace.Db or "", namespace.Collection or "")


def namespace_name(key: NamespaceKey) -> str:
    return f"{key[0]}.{key[1]}"


# Model <-> remote translation

def namespace_to_remote(namespace: ManagedNamespace) -> Dict[str, Any]:
    remote = {
        "db": namespace.Db or "",
        "collection": namespace.Collection or "",
        "customShardKey": namespace.CustomShardKey or "",
    }
    if namespace.IsCustomShardKeyHashed is not None:
        remote["isCustomShardKeyHashed"] = namespace.IsCustomShardKeyHashed
    if namespace.IsShardKeyUnique is not None:
        remote["isShardKeyUnique"] = namespace.IsShardKeyUnique
    return remote


def remote_to_namespace(remote: Mapping[str, Any]) -> ManagedNamespace:
    return ManagedNamespace(
        Db=remote.get("db"),
        Collection=remote.get("collection"),
        CustomShardKey=remote.get("customShardKey"),
        IsCustomShardKeyHashed=remote.get("isCustomShardKeyHashed"),
        IsShardKeyUnique=remote.get("isShardKeyUnique"),
    )


def flatten_managed_namespaces(remote: Optional[Sequence[Mapping[str, Any]]]) -> Optional[List[ManagedNamespace]]:
    if not remote:
        return None
    return [remote_to_namespace(item) for item in remote]


def zone_mappings_to_remote(mappings: Optional[Sequence[Optional[ZoneMapping]]]) -> List[Dict[str, str]]:
    """
    Converts model zone mappings to the Atlas request shape

    Mappings without a Location or a Zone are invalid and are dropped, never sent to Atlas.

    :param mappings: Zone mappings from the resource model
    :return list: `[{"location": ..., "zone": ...}]`
    """
    remote = []
    for mapping in mappings or []:
        if mapping is None or mapping.Location is None or mapping.Zone is None:
            LOG.debug('Dropping incomplete zone mapping %s', mapping)
            continue
        remote.append({"location": mapping.Location, "zone": mapping.Zone})
    return remote


def remote_to_zone_mappings(remote: Optional[Mapping[str, str]]) -> Optional[List[ZoneMapping]]:
    """
    Converts the Atlas `{location: zone}` mapping to model zone mappings, keeping the remote order

    :param remote: customZoneMapping from the global cluster
    :return: Zone mappings, or None when there are none
    """
    if not remote:
        return None
    mappings = [ZoneMapping(Location=location, Zone=zone) for location, zone in remote.items() if location]
    return mappings or None


# Reconciliation

def plan_removals(current: Optional[Sequence[ManagedNamespace]],
                  requested: Optional[Sequence[ManagedNamespace]]) -> RemovalPlan:
    """
    Splits the requested namespaces into those present remotely and those Atlas does not know about

    Requested namespaces are keyed by (Db, Collection); repeated keys are collapsed onto the first occurrence.

    :param current: Namespaces currently managed by the global cluster, as read back from Atlas
    :param requested: Namespaces to remove from the resource model
    :return RemovalPlan:
    """
    remote_keys = {namespace_key(namespace) for namespace in current or [] if namespace is not None}
    seen = set()
    plan = RemovalPlan(to_remove=[], not_present=[])
    for namespace in requested or []:
        if namespace is None:
            continue
        key = namespace_key(namespace)
        if key in seen:
            continue
        seen.add(key)
        if key in remote_keys:
            plan.to_remove.append(namespace)
        else:
            plan.not_present.append(key)
    return plan


def add_managed_namespaces(client: AtlasClient, project_id: str, cluster_name: str,
                           namespaces: Optional[Sequence[ManagedNamespace]]) -> List[NamespaceResult]:
    """
    Adds namespaces one at a time

    A DUPLICATE_MANAGED_NAMESPACE answer is recorded as ALREADY_PRESENT. Any other error stops the loop and is raised
    to the caller.

    :return list: One NamespaceResult per namespace added or already present
    """
    results = []
    for namespace in namespaces or []:
        if namespace is None:
            continue
        key = namespace_key(namespace)
        try:
            client.add_managed_namespace(project_id, cluster_name, namespace_to_remote(namespace))
        except AtlasApiError as e:
            if e.error_code != DUPLICATE_MANAGED_NAMESPACE:
                LOG.warning('Error while adding namespace %s: %s', namespace_name(key), e)
                raise
            LOG.info('Namespace %s is already managed', namespace_name(key))
            results.append(NamespaceResult(key, NamespaceOutcome.ALREADY_PRESENT, e))
            continue
        LOG.debug('Added namespace %s', namespace_name(key))
        results.append(NamespaceResult(key, NamespaceOutcome.ADDED))
    return results


def remove_managed_namespaces(client: AtlasClient, project_id: str, cluster_name: str,
                              plan: RemovalPlan) -> List[NamespaceResult]:
    """
    Applies a removal plan one namespace at a time

    Removal is best effort: a failure is logged and recorded, and the remaining namespaces are still removed.

    :return list: One NamespaceResult per planned namespace, including those not present remotely
    """
    results = [NamespaceResult(key, NamespaceOutcome.NOT_PRESENT) for key in plan.not_present]
    for key in plan.not_present:
        LOG.info('Namespace %s is not managed by cluster %s, skipping', namespace_name(key), cluster_name)
    for namespace in plan.to_remove:
        key = namespace_key(namespace)
        try:
            client.delete_managed_namespace(project_id, cluster_name, key[0], key[1])
        except AtlasApiError as e:
            LOG.warning('Error while removing namespace %s: %s', namespace_name(key), e)
            results.append(NamespaceResult(key, NamespaceOutcome.FAILED, e))
            continue
        LOG.debug('Removed namespace %s', namespace_name(key))
        results.append(NamespaceResult(key, NamespaceOutcome.REMOVED))
    return results


def failed_results(results: Sequence[NamespaceResult]) -> List[NamespaceResult]:
    return [result for result in results if result.outcome is NamespaceOutcome.FAILED]
