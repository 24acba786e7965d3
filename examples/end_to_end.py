"""
End-to-end example: canonical encoding, content ids and signatures

This script demonstrates:
- Encoding records and tagged variants to canonical JSON
- What the encoder rejects
- Computing a content identifier
- Signing and verifying a value
"""

from canonjson import (
    CanonicalValue,
    EncodeError,
    FileSigner,
    StructVariant,
    TupleVariant,
    build_jwks_for_signers,
    compute_cid,
    encode_to_text,
    sign_value,
    verify_value,
)

# 1. Keys must already be in ascending order; integral floats become integers
print(encode_to_text({"amount": 42.0, "tags": ["a", "b"], "user": "alice"}))

# 2. Tagged variants are externally tagged
print(encode_to_text(TupleVariant("Frog", ("Henry", [349, 102]))))
print(encode_to_text(StructVariant("Cat", {"age": 5, "name": "Kate"})))

# 3. Non-canonical input fails loudly instead of being repaired
for bad in ({"b": 1, "a": 2}, 3.1, {1: "x"}):
    try:
        encode_to_text(bad)
    except EncodeError as e:
        print("rejected:", e.reason.value, "-", e)

# 4. A parsed document has no meaningful key order, so it is visited sorted
doc = CanonicalValue.from_json('{"user": "alice", "amount": 42}')
print("Document:", doc)
print("CID:", compute_cid(doc))

# 5. Sign the canonical bytes and verify (Ed25519, deterministic seed for demo)
signer = FileSigner("AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA")
signature = sign_value(doc, signer)
jwks = build_jwks_for_signers([signer])
print("Verification:", verify_value(doc, signature, jwks, signer.kid))
