"""
bitshift - keyed bit transposition cipher
"""

from bitshift.transpose import ByteTransposer, encrypt, decrypt, transpose_bytes, transpose_copy
from bitshift.indexgen import IndexGenerator
from bitshift.keyhash import key_seed

__version__ = '1.0.0'
