from bitshift.transpose import transpose_copy
from bitshift.keyhash import HASHES, key_seed
from bitshift.randsrc import SOURCES
from bitshift.profile import DEFAULTS, load_profile
import argparse, contextlib
import yaml
import sys

###############################################################################

DESCRIPTION = '''\
bitshift is a custom encryption program that pseudorandomly swaps individual bits
in each byte of a file to encrypt it. It uses a symmetric encryption key to determine
the order in which bits are swapped within each byte, meaning the same key is used
to both encrypt and decrypt the message. Data is read from the given input file and
the result is written to the given output file.'''

EPILOG = '''\
sample use:
  bitshift helloworld source.txt dest.txt
      encrypts the contents of source.txt using the key "helloworld", writing
      the result to dest.txt
  bitshift -d helloworld dest.txt recovered.txt
      decrypts the ciphertext in dest.txt to recover the original plaintext,
      through use of the '-d' option and the same key that was used before

Files are read and written as binary data, so any kind of file can be used, not
just text. To use a key that includes spaces, wrap it in double quotes ("...").
Use --compat to get the very same output as the original C++ bitshift built with
GCC on 64-bit Linux. Not a secure cipher, don't trust it with real secrets!'''

def anyint(s):
    return int(s, 0)

def make_parser():
    ap = argparse.ArgumentParser(prog='bitshift', description=DESCRIPTION, epilog=EPILOG,
                                 formatter_class=argparse.RawDescriptionHelpFormatter)

    ap.add_argument('-d', '--decrypt', action='store_true',
                    help='Treat the input as ciphertext and decrypt it')

    ap.add_argument('-v', '--verbose', action='store_true',
                    help='Print every byte as it gets transformed (to stderr)')

    ap.add_argument('--hash', choices=list(HASHES),
                    help='Key to seed hash (default: %s)' % DEFAULTS['hash'])

    ap.add_argument('--prng', choices=list(SOURCES),
                    help='Pseudorandom source driving the bit order (default: %s)' % DEFAULTS['prng'])

    ap.add_argument('--compat', action='store_true',
                    help='Be compatible with the original tool, same as "--hash stdhash --prng glibc"')

    ap.add_argument('--profile', metavar='FILE',
                    help='Yaml profile with the defaults for the options above')

    ap.add_argument('--block', type=anyint, metavar='SIZE',
                    help='Read block size (default: %d bytes)' % DEFAULTS['block'])

    ap.add_argument('key',
                    help='Encryption key')

    ap.add_argument('input',
                    help='Input file ("-" for stdin)')

    ap.add_argument('output',
                    help='Output file ("-" for stdout)')

    return ap

###############################################################################

def open_stream(path, mode):
    # "-" means stdin/stdout, which are not ours to close
    if path == '-':
        stream = sys.stdin if 'r' in mode else sys.stdout
        return contextlib.nullcontext(stream.buffer)
    return open(path, mode)

def printable(b):
    return chr(b) if 0x20 <= b < 0x7f else '.'

def main(argv=None):
    ap = make_parser()
    args = ap.parse_args(argv)

    settings = dict(DEFAULTS)

    if args.profile is not None:
        try:
            settings.update(load_profile(args.profile))
        except (OSError, ValueError, yaml.YAMLError) as e:
            print(f'Error: failed to load profile "{args.profile}": {e}', file=sys.stderr)
            return 1

    if args.compat:
        settings['hash'] = 'stdhash'
        settings['prng'] = 'glibc'

    if args.hash is not None:  settings['hash'] = args.hash
    if args.prng is not None:  settings['prng'] = args.prng
    if args.block is not None: settings['block'] = args.block

    if settings['block'] <= 0:
        ap.error('the block size shall be positive')

    seed = key_seed(args.key, settings['hash'])

    trace = None

    if args.verbose:
        print('Decryption mode' if args.decrypt else 'Encryption mode', file=sys.stderr)
        print(f'seed: {seed:016x} ({settings["hash"]}), source: {settings["prng"]}', file=sys.stderr)

        def trace(ib, ob):
            print(f'{printable(ib)} ({ib})\t->\t{printable(ob)} ({ob})', file=sys.stderr)

    try:
        inctx = open_stream(args.input, 'rb')
    except OSError as e:
        print(f'Error: the input file `{args.input}` cannot be read: {e.strerror}', file=sys.stderr)
        return 2

    with inctx as inf:
        try:
            outctx = open_stream(args.output, 'wb')
        except OSError as e:
            print(f'Error: the output file `{args.output}` cannot be written: {e.strerror}', file=sys.stderr)
            return 2

        with outctx as outf:
            count = transpose_copy(inf, outf, seed, args.decrypt, settings['prng'], settings['block'], trace)
            outf.flush()

    if args.verbose:
        print(f'{count} bytes processed', file=sys.stderr)

    return 0
