"""
bitshift profiles: a yaml file with the defaults for the command line tool.

    type: bitshift-profile
    hash: stdhash       # crc64 / stdhash
    prng: glibc         # mt / glibc / aes
    block: 0x1000       # read block size
    compat: false       # shorthand for stdhash + glibc
"""

__all__ = [
    'DEFAULTS',
    'parse_profile',
    'load_profile',
]

from bitshift.keyhash import HASHES
from bitshift.randsrc import SOURCES
import yaml

DEFAULTS = {
    'hash':  'crc64',
    'prng':  'mt',
    'block': 4096,
}

def parse_profile(info):
    """ Check the loaded profile contents and turn them into settings """
    if not isinstance(info, dict) or info.get('type') != 'bitshift-profile':
        raise ValueError('This yaml file is not a bitshift profile!')

    settings = {}

    if info.get('compat'):
        settings['hash'] = 'stdhash'
        settings['prng'] = 'glibc'

    if 'hash' in info:
        if info['hash'] not in HASHES:
            raise ValueError(f'Unknown key hash "{info["hash"]}" in the profile')
        settings['hash'] = info['hash']

    if 'prng' in info:
        if info['prng'] not in SOURCES:
            raise ValueError(f'Unknown random source "{info["prng"]}" in the profile')
        settings['prng'] = info['prng']

    if 'block' in info:
        block = info['block']
        if isinstance(block, str):
            try:
                block = int(block, 0)
            except ValueError:
                raise ValueError(f'Invalid block size "{info["block"]}" in the profile') from None
        if not isinstance(block, int) or isinstance(block, bool) or block <= 0:
            raise ValueError(f'Invalid block size "{info["block"]}" in the profile')
        settings['block'] = block

    return settings

def load_profile(path):
    with open(path) as f:
        info = yaml.load(f, Loader=yaml.SafeLoader)

    return parse_profile(info)
