"""
MongoDB::Atlas::GlobalClusterConfig Resource Provider

Manages the managed namespaces and custom zone mappings of an Atlas Global Cluster.

* CREATE: Adds every managed namespace of the model, one at a time, then sets the custom zone mappings.
* READ: Reads namespaces and zone mappings back from Atlas. A cluster with neither is reported as not found.
* UPDATE: Not supported by Atlas. Reports success without applying changes.
* DELETE: Removes the listed namespaces (best effort) and, when `RemoveAllZoneMapping` is set, every zone mapping.
* LIST: Not supported. Reports success with no models.
"""
