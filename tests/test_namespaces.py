"""Tests for namespace and zone mapping translation and reconciliation."""

import pytest

from mongodb_atlas_globalclusterconfig.models import ManagedNamespace, ZoneMapping
from mongodb_atlas_globalclusterconfig.namespaces import (
    NamespaceOutcome,
    add_managed_namespaces,
    failed_results,
    flatten_managed_namespaces,
    namespace_to_remote,
    plan_removals,
    remote_to_zone_mappings,
    remove_managed_namespaces,
    zone_mappings_to_remote,
)
from mongodb_atlas_util.atlas import AtlasApiError


def _ns(db, collection, shard_key="region", hashed=None, unique=None):
    return ManagedNamespace(Db=db, Collection=collection, CustomShardKey=shard_key,
                            IsCustomShardKeyHashed=hashed, IsShardKeyUnique=unique)


def test_namespace_to_remote() -> None:
    assert namespace_to_remote(_ns("sales", "orders", hashed=True, unique=False)) == {
        "db": "sales",
        "collection": "orders",
        "customShardKey": "region",
        "isCustomShardKeyHashed": True,
        "isShardKeyUnique": False,
    }


def test_namespace_to_remote_omits_unset_flags() -> None:
    assert namespace_to_remote(_ns("sales", "orders")) == {
        "db": "sales", "collection": "orders", "customShardKey": "region",
    }


def test_flatten_managed_namespaces() -> None:
    remote = [{"db": "sales", "collection": "orders", "customShardKey": "region",
               "isCustomShardKeyHashed": False, "isShardKeyUnique": True}]
    assert flatten_managed_namespaces(remote) == [_ns("sales", "orders", hashed=False, unique=True)]
    assert flatten_managed_namespaces([]) is None


def test_zone_mappings_drop_incomplete_entries() -> None:
    mappings = [
        ZoneMapping(Location="US", Zone="Zone 1"),
        ZoneMapping(Location=None, Zone="Zone 2"),
        ZoneMapping(Location="DE", Zone=None),
        None,
        ZoneMapping(Location="FR", Zone="Zone 2"),
    ]
    assert zone_mappings_to_remote(mappings) == [
        {"location": "US", "zone": "Zone 1"},
        {"location": "FR", "zone": "Zone 2"},
    ]


def test_zone_mappings_to_remote_empty() -> None:
    assert zone_mappings_to_remote(None) == []
    assert zone_mappings_to_remote([]) == []


def test_remote_to_zone_mappings_keeps_order() -> None:
    mappings = remote_to_zone_mappings({"US": "z1", "": "z2", "DE": "z3"})
    assert mappings == [ZoneMapping(Location="US", Zone="z1"), ZoneMapping(Location="DE", Zone="z3")]
    assert remote_to_zone_mappings({}) is None


def test_plan_removals() -> None:
    current = [_ns("sales", "orders"), _ns("sales", "customers")]
    requested = [_ns("sales", "orders"), _ns("hr", "staff"), _ns("sales", "orders", shard_key="other")]

    plan = plan_removals(current, requested)

    assert plan.to_remove == [_ns("sales", "orders")]
    assert plan.not_present == [("hr", "staff")]


def test_add_managed_namespaces_tolerates_duplicates(atlas_client) -> None:
    atlas_client.add_managed_namespace.side_effect = [
        None,
        AtlasApiError("duplicate", status_code=400, error_code="DUPLICATE_MANAGED_NAMESPACE"),
    ]

    results = add_managed_namespaces(atlas_client, "p1", "c1", [_ns("a", "b"), _ns("c", "d")])

    assert [r.outcome for r in results] == [NamespaceOutcome.ADDED, NamespaceOutcome.ALREADY_PRESENT]
    assert atlas_client.add_managed_namespace.call_count == 2


def test_add_managed_namespaces_stops_on_other_errors(atlas_client) -> None:
    atlas_client.add_managed_namespace.side_effect = AtlasApiError("bad key", status_code=400,
                                                                   error_code="INVALID_SHARD_KEY")

    with pytest.raises(AtlasApiError):
        add_managed_namespaces(atlas_client, "p1", "c1", [_ns("a", "b"), _ns("c", "d")])
    assert atlas_client.add_managed_namespace.call_count == 1


def test_remove_managed_namespaces_is_best_effort(atlas_client) -> None:
    atlas_client.delete_managed_namespace.side_effect = [AtlasApiError("boom", status_code=500), None]
    plan = plan_removals([_ns("a", "b"), _ns("c", "d")], [_ns("a", "b"), _ns("c", "d"), _ns("x", "y")])

    results = remove_managed_namespaces(atlas_client, "p1", "c1", plan)

    assert atlas_client.delete_managed_namespace.call_count == 2
    atlas_client.delete_managed_namespace.assert_any_call("p1", "c1", "c", "d")
    outcomes = {r.name: r.outcome for r in results}
    assert outcomes == {
        "x.y": NamespaceOutcome.NOT_PRESENT,
        "a.b": NamespaceOutcome.FAILED,
        "c.d": NamespaceOutcome.REMOVED,
    }
    assert [r.name for r in failed_results(results)] == ["a.b"]
