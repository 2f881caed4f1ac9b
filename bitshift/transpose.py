"""
The bit transposition cipher itself
"""

__all__ = [
    'bit_copy',
    'ByteTransposer',
    'transpose_bytes',
    'transpose_copy',
    'encrypt',
    'decrypt',
]

from bitshift.indexgen import IndexGenerator
from bitshift.randsrc import make_source
from bitshift.keyhash import key_seed


def bit_copy(src, dst, src_bit, dst_bit):
    """ Copy bit src_bit of src into bit dst_bit of dst (OR-ing it in, never clearing) """
    if not (0 <= src_bit < 8 and 0 <= dst_bit < 8):
        raise ValueError(f'Bit index out of range ({src_bit} -> {dst_bit})')

    return dst | (((src >> src_bit) & 1) << dst_bit)


class ByteTransposer:
    """
    Maps each byte by moving its bits around, as told by a pair of index generators.

    For every bit the "source" generator picks the bit to read and the "destination"
    one picks where to put it. Decryption draws the very same (a, b) pairs and just
    flips the direction of the copy, so both sides have to start from identically
    seeded generators and process the same bytes in the same order.
    """

    def __init__(self, srcgen, dstgen):
        self.srcgen = srcgen
        self.dstgen = dstgen

    @classmethod
    def from_seed(cls, seed, prng='mt'):
        # both generators pull from the one source, otherwise they'd emit the same permutation
        source = make_source(prng, seed)
        return cls(IndexGenerator(source), IndexGenerator(source))

    def transform_byte(self, byte, decrypt=False):
        out = 0

        for i in range(8):
            a = self.srcgen.next_index()
            b = self.dstgen.next_index()

            if decrypt:
                out = bit_copy(byte, out, b, a)
            else:
                out = bit_copy(byte, out, a, b)

        return out

    def transform(self, data, decrypt=False):
        return bytes(self.transform_byte(b, decrypt) for b in data)


def transpose_copy(inf, outf, seed, decrypt=False, prng='mt', block=4096, trace=None):
    """
    Stream the input file through the cipher into the output file, block by block.
    Returns the number of bytes processed.
    """
    bt = ByteTransposer.from_seed(seed, prng)
    total = 0

    while True:
        blk = inf.read(block)
        if not blk: break

        out = bt.transform(blk, decrypt)

        if trace is not None:
            for ib, ob in zip(blk, out):
                trace(ib, ob)

        outf.write(out)
        total += len(out)

    return total

def transpose_bytes(data, key, decrypt=False, hashname='crc64', prng='mt'):
    bt = ByteTransposer.from_seed(key_seed(key, hashname), prng)
    return bt.transform(data, decrypt)

def encrypt(data, key, **kwargs):
    return transpose_bytes(data, key, False, **kwargs)

def decrypt(data, key, **kwargs):
    return transpose_bytes(data, key, True, **kwargs)
