# Bounds of a signed 64-bit integer, the range of timestamps and limits the
# indexer side can represent.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
