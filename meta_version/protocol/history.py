"""
The recorded history of every protocol feature.

Entries are grouped by release, oldest first. Server entries describe what
meta-server provides, client entries what meta-client requires. Versions
marked as placeholders were assigned after the fact to features that had
already shipped for a while.

Any change here that moves a threshold must be mirrored in constants.py;
tests/protocol/test_published_thresholds.py fails until it is.
"""

from .feature import Feature
from .spec import SpecBuilder
from .version import Version


F = Feature


def ver(major: int, minor: int, patch: int) -> Version:
    return Version(major, minor, patch)


def record_history(builder: SpecBuilder) -> SpecBuilder:
    # 1.2.163 (placeholder): server adds stream api kv_read_v1()
    for feature in (
        F.OPERATION_AS_IS,
        F.KV_API,
        F.KV_API_GET_KV,
        F.KV_API_MGET_KV,
        F.KV_API_LIST_KV,
        F.KV_READ_V1,
    ):
        builder.server_add(feature, ver(1, 2, 163))

    for feature in (
        F.OPERATION_AS_IS,
        F.KV_API,
        F.KV_API_GET_KV,
        F.KV_API_MGET_KV,
        F.KV_API_LIST_KV,
    ):
        builder.client_add(feature, ver(1, 2, 163))

    # 1.2.176: client calls kv_read_v1()
    builder.client_add(F.KV_READ_V1, ver(1, 2, 176))

    # 1.2.258: server adds transactions with ttl and reply errors
    builder.server_add(F.TRANSACTION, ver(1, 2, 258))
    builder.server_add(F.TRANSACTION_REPLY_ERROR, ver(1, 2, 258))
    builder.server_add(F.TRANSACTION_PUT_WITH_TTL, ver(1, 2, 258))

    builder.client_add(F.TRANSACTION_REPLY_ERROR, ver(1, 2, 258))

    # 1.2.259 (placeholder, the 1.2.258 binary reports 1.2.257)
    for feature in (
        F.EXPORT,
        F.WATCH,
        F.MEMBER_LIST,
        F.GET_CLUSTER_STATUS,
        F.GET_CLIENT_INFO,
    ):
        builder.server_add(feature, ver(1, 2, 259))

    for feature in (
        F.TRANSACTION,
        F.EXPORT,
        F.WATCH,
        F.MEMBER_LIST,
        F.GET_CLUSTER_STATUS,
        F.GET_CLIENT_INFO,
    ):
        builder.client_add(feature, ver(1, 2, 259))

    # 1.2.287: client stops calling kv_api() with GetKV/MGetKV/ListKV
    builder.client_remove(F.KV_API_GET_KV, ver(1, 2, 287))
    builder.client_remove(F.KV_API_MGET_KV, ver(1, 2, 287))
    builder.client_remove(F.KV_API_LIST_KV, ver(1, 2, 287))

    # 1.2.315: server adds export_v1() with a client chosen chunk size
    builder.server_add(F.EXPORT_V1, ver(1, 2, 315))

    # 1.2.361: client uses ttl instead of expire_at
    builder.client_add(F.TRANSACTION_PUT_WITH_TTL, ver(1, 2, 361))

    # 1.2.663: server drops GetKV/MGetKV/ListKV, client drops Operation::AsIs
    builder.server_remove(F.KV_API_GET_KV, ver(1, 2, 663))
    builder.server_remove(F.KV_API_MGET_KV, ver(1, 2, 663))
    builder.server_remove(F.KV_API_LIST_KV, ver(1, 2, 663))

    builder.client_remove(F.OPERATION_AS_IS, ver(1, 2, 663))

    # 1.2.674: server adds the keys-with-prefix transaction condition
    builder.server_add(F.TRANSACTION_CONDITION_KEYS_PREFIX, ver(1, 2, 674))

    # 1.2.676: server adds TxnRequest::operations, client stops reading
    # TxnReply::error
    builder.server_add(F.TRANSACTION_OPERATIONS, ver(1, 2, 676))

    builder.client_remove(F.TRANSACTION_REPLY_ERROR, ver(1, 2, 676))

    # 1.2.677: server adds WatchRequest::initial_flush
    builder.server_add(F.WATCH_INITIAL_FLUSH, ver(1, 2, 677))

    # 1.2.726: client requires 1.2.677
    builder.client_add(F.WATCH_INITIAL_FLUSH, ver(1, 2, 726))
    builder.client_add(F.WATCH_RESPONSE_IS_INIT, ver(1, 2, 726))
    builder.client_add(F.TRANSACTION_CONDITION_KEYS_PREFIX, ver(1, 2, 726))
    builder.client_add(F.TRANSACTION_OPERATIONS, ver(1, 2, 726))

    # 1.2.736: server adds WatchResponse::is_initialization
    builder.server_add(F.WATCH_RESPONSE_IS_INIT, ver(1, 2, 736))

    # 1.2.755: server drops TxnReply::error
    builder.server_remove(F.TRANSACTION_REPLY_ERROR, ver(1, 2, 755))

    # 1.2.756: TxnPutResponse::current
    builder.server_add(F.PUT_RESPONSE_CURRENT, ver(1, 2, 756))
    builder.client_add(F.PUT_RESPONSE_CURRENT, ver(1, 2, 756))

    # 1.2.764: server adds FetchAddU64
    builder.server_add(F.FETCH_ADD_U64, ver(1, 2, 764))

    # 1.2.770: server accepts expire_at in milliseconds, adds PutSequential
    builder.server_add(F.EXPIRE_IN_MILLIS, ver(1, 2, 770))
    builder.server_add(F.PUT_SEQUENTIAL, ver(1, 2, 770))

    # 1.2.821: client uses FetchAddU64 (1.2.764 was yanked)
    builder.client_add(F.FETCH_ADD_U64, ver(1, 2, 821))

    # 1.2.823: server stores proposed_at_ms in KVMeta, client stops calling
    # kv_api()
    builder.server_add(F.PROPOSED_AT_MS, ver(1, 2, 823))

    builder.client_remove(F.KV_API, ver(1, 2, 823))

    # 1.2.828: server renames FetchAddU64 to FetchIncreaseU64 with max_value
    builder.server_add(F.FETCH_INCREASE_U64, ver(1, 2, 828))

    # 1.2.869: server adds kv_list and kv_get_many
    builder.server_add(F.KV_LIST, ver(1, 2, 869))
    builder.server_add(F.KV_GET_MANY, ver(1, 2, 869))

    # 260205.0.0: client lets applications use expire in millis
    builder.client_add(F.EXPIRE_IN_MILLIS, ver(260205, 0, 0))
    builder.client_add(F.PUT_SEQUENTIAL, ver(260205, 0, 0))

    # Not required by any released client yet
    for feature in (
        F.EXPORT_V1,
        F.PROPOSED_AT_MS,
        F.FETCH_INCREASE_U64,
        F.KV_LIST,
        F.KV_GET_MANY,
    ):
        builder.client_add(feature, Version.max())

    return builder
