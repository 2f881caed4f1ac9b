"""
Bit index generator: hands out the numbers 0..7 in a pseudorandom order,
every one of them exactly once per cycle of eight calls.
"""

__all__ = [
    'IndexGenerator',
]


class IndexGenerator:
    def __init__(self, source):
        # where the candidates come from (anything with a draw() giving 0..7)
        self.source = source
        # bit N is set once the index N was handed out in the current cycle
        self.mask = 0x00

    def next_index(self):
        """ Return an index not yet returned in this cycle, starting a new one when all 8 are gone """
        if self.mask == 0xFF:
            self.mask = 0x00

        while True:
            idx = self.source.draw()
            if not self.mask & (1 << idx):
                break

        self.mask |= 1 << idx
        return idx

    def __iter__(self):
        return self

    def __next__(self):
        return self.next_index()
