"""
Pseudorandom sources feeding the index generators
"""

__all__ = [
    'MTSource',
    'GlibcSource',
    'AESSource',
    'SOURCES',
    'make_source',
]

from collections import deque
from Cryptodome.Cipher import AES
import random


class MTSource:
    """ Python's own Mersenne Twister, three raw bits per draw """

    def __init__(self, seed):
        self.rng = random.Random(seed)

    def draw(self):
        return self.rng.getrandbits(3)


def _cdiv(a, b):
    # C division truncates towards zero
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q

class GlibcSource:
    """
    glibc's srand()/rand() (the default TYPE_3 additive feedback generator),
    reproduced bit for bit.

    srand() only takes an unsigned int, so only the low 32 bits of the seed count.
    """

    def __init__(self, seed):
        seed &= 0xFFFFFFFF
        if seed == 0:
            seed = 1

        # the state words are int32_t in there
        word = seed - (1 << 32) if seed & 0x80000000 else seed

        r = [word & 0xFFFFFFFF]

        for i in range(1, 31):
            hi = _cdiv(word, 127773)
            lo = word - hi * 127773
            word = 16807 * lo - 2836 * hi
            if word < 0:
                word += 2147483647
            r.append(word & 0xFFFFFFFF)

        for i in range(31, 34):
            r.append(r[i - 31])

        self.state = deque(r, maxlen=34)

        # srand() throws away the first 310 outputs
        for i in range(310):
            self._step()

    def _step(self):
        val = (self.state[-31] + self.state[-3]) & 0xFFFFFFFF
        self.state.append(val)
        return val

    def rand(self):
        """ Next rand() value, 0..RAND_MAX """
        return self._step() >> 1

    def draw(self):
        return self.rand() % 8


class AESSource:
    """ AES-128 in CTR mode as a keystream, three bits out of every byte """

    chunk = 64

    def __init__(self, seed):
        key = (seed & 0xFFFFFFFFFFFFFFFF).to_bytes(8, 'little') * 2
        self.cipher = AES.new(key, AES.MODE_CTR, nonce=bytes(8))
        self.buff = b''
        self.pos = 0

    def draw(self):
        if self.pos >= len(self.buff):
            self.buff = self.cipher.encrypt(bytes(self.chunk))
            self.pos = 0

        val = self.buff[self.pos] & 7
        self.pos += 1
        return val


SOURCES = {
    'mt':    MTSource,
    'glibc': GlibcSource,
    'aes':   AESSource,
}

def make_source(name, seed):
    """ Instantiate the named source with the given seed """
    if name not in SOURCES:
        raise ValueError(f'Unknown random source "{name}" (expected one of: {", ".join(SOURCES)})')

    return SOURCES[name](seed)
