"""
Key to seed derivation
"""

__all__ = [
    'bs_crc64',
    'stdhash',
    'HASHES',
    'key_bytes',
    'key_seed',
]

import crcmod.predefined

bs_crc64 = crcmod.predefined.mkPredefinedCrcFun('crc-64-we')

M64 = 0xFFFFFFFFFFFFFFFF

def _shift_mix(v):
    return v ^ (v >> 47)

def stdhash(data, seed=0xc70f6907):
    """
    libstdc++'s std::hash<std::string> on a 64-bit target (that is, _Hash_bytes),
    which is what the original bitshift tool seeds rand() with.
    """
    mul = 0xc6a4a7935bd1e995
    nlen = len(data)
    tail = nlen & ~7

    h = (seed ^ (nlen * mul)) & M64

    for off in range(0, tail, 8):
        word = int.from_bytes(data[off:off+8], 'little')
        word = (_shift_mix((word * mul) & M64) * mul) & M64
        h ^= word
        h = (h * mul) & M64

    if nlen & 7:
        h ^= int.from_bytes(data[tail:], 'little')
        h = (h * mul) & M64

    h = (_shift_mix(h) * mul) & M64
    return _shift_mix(h)


HASHES = {
    'crc64':   bs_crc64,
    'stdhash': stdhash,
}

def key_bytes(key):
    """ Keys are raw bytes, text ones are taken as UTF-8 (undecodable argv bytes come back as they were) """
    if isinstance(key, str):
        return key.encode('utf-8', 'surrogateescape')
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f'The key shall be a string or bytes, not {type(key).__name__}')

def key_seed(key, hashname='crc64'):
    """ Turn the key into a 64-bit seed; the same key always gives the same seed """
    if hashname not in HASHES:
        raise ValueError(f'Unknown key hash "{hashname}" (expected one of: {", ".join(HASHES)})')

    return HASHES[hashname](key_bytes(key)) & M64
