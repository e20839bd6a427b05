"""Store-safe keys for security identifiers.

The store rejects ``.`` in keys, so every dot is written as ``_DOT_``,
a sequence that cannot appear in a legal ticker (alphanumerics, dot,
dash). Values are never touched.
"""

DOT = "."
DOT_ESCAPE = "_DOT_"

def encode_key(key: str) -> str:
    return key.replace(DOT, DOT_ESCAPE)

def decode_key(key: str) -> str:
    return key.replace(DOT_ESCAPE, DOT)

def encode_keys(obj: dict | None) -> dict | None:
    if obj is None:
        return None
    return {encode_key(k): v for k, v in obj.items()}

def decode_keys(obj: dict | None) -> dict | None:
    if obj is None:
        return None
    return {decode_key(k): v for k, v in obj.items()}
