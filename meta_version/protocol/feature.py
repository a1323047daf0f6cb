"""
Named capabilities of the meta-service protocol.

Every feature whose lifetime matters for compatibility is a member of
Feature. The set is closed: adding a capability means adding a member here
and recording its history in the shipped registry (see spec.py), which
refuses to build while any member is missing.

Member values are the stable identifiers used in logs and diagnostics.
They are never sent over the wire.
"""

from enum import Enum


class Feature(str, Enum):
    """A named capability in the meta-service protocol."""

    # Unary kv_api() RPC and its sub-operations
    KV_API = "kv_api"
    KV_API_GET_KV = "kv_api/get_kv"
    KV_API_MGET_KV = "kv_api/mget_kv"
    KV_API_LIST_KV = "kv_api/list_kv"

    # Stream based kv_read_v1() RPC
    KV_READ_V1 = "kv_read_v1"

    # transaction() RPC and its extensions
    TRANSACTION = "transaction"
    TRANSACTION_REPLY_ERROR = "transaction/reply_error"
    TRANSACTION_PUT_WITH_TTL = "transaction/put_with_ttl"
    TRANSACTION_CONDITION_KEYS_PREFIX = "transaction/condition_keys_prefix"
    TRANSACTION_OPERATIONS = "transaction/operations"

    # Operation::AsIs, update metadata and keep the value
    OPERATION_AS_IS = "operation/as_is"

    EXPORT = "export"
    EXPORT_V1 = "export_v1"

    WATCH = "watch"
    WATCH_INITIAL_FLUSH = "watch/initial_flush"
    WATCH_RESPONSE_IS_INIT = "watch/init_flag"

    MEMBER_LIST = "member_list"
    GET_CLUSTER_STATUS = "get_cluster_status"
    GET_CLIENT_INFO = "get_client_info"

    PUT_RESPONSE_CURRENT = "put_response/current"

    # Superseded by FETCH_INCREASE_U64
    FETCH_ADD_U64 = "fetch_add_u64"

    # expire_at accepts seconds and milliseconds
    EXPIRE_IN_MILLIS = "expire_in_millis"
    PUT_SEQUENTIAL = "put_sequential"
    PROPOSED_AT_MS = "proposed_at_ms"
    FETCH_INCREASE_U64 = "fetch_increase_u64"

    KV_LIST = "kv_list"
    KV_GET_MANY = "kv_get_many"

    @classmethod
    def all(cls) -> tuple["Feature", ...]:
        """All features, in declaration order."""
        return tuple(cls)

    @classmethod
    def from_name(cls, name: str) -> "Feature":
        """
        Look up a feature by its identifier.

        Raises:
            ValueError: If no feature has this identifier.
        """
        return cls(name)

    def __str__(self) -> str:
        return self.value
