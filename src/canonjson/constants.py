DEFAULT_MAX_DEPTH = 128
MAX_DEPTH_ENV = "CANONJSON_MAX_DEPTH"

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1
U64_MAX = 2**64 - 1

CID_PREFIX = "sha256:"
