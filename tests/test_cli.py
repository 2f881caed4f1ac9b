from bitshift.cli import main
from bitshift.transpose import encrypt
import io
import os
import sys
import pytest

PLAIN = b'Hello, bitshift!\n\x00\x01\x02\xfe\xff' * 20

@pytest.fixture
def plainfile(tmp_path):
    path = tmp_path / 'source.txt'
    path.write_bytes(PLAIN)
    return path

def test_round_trip(tmp_path, plainfile):
    dest = tmp_path / 'dest.txt'
    back = tmp_path / 'recovered.txt'

    assert main(['helloworld', str(plainfile), str(dest)]) == 0
    assert dest.read_bytes() == encrypt(PLAIN, 'helloworld')

    assert main(['-d', 'helloworld', str(dest), str(back)]) == 0
    assert back.read_bytes() == PLAIN

def test_wrong_key(tmp_path, plainfile):
    dest = tmp_path / 'dest.txt'
    back = tmp_path / 'recovered.txt'

    main(['helloworld', str(plainfile), str(dest)])
    main(['-d', 'hello world', str(dest), str(back)])
    assert back.read_bytes() != PLAIN

def test_compat(tmp_path):
    src = tmp_path / 'a.txt'
    src.write_bytes(b'A')
    dest = tmp_path / 'a.enc'

    assert main(['--compat', 'helloworld', str(src), str(dest)]) == 0
    assert dest.read_bytes() == b'H'

def test_compat_non_utf8_key(tmp_path):
    src = tmp_path / 'a.bin'
    src.write_bytes(b'Hi!\x00\xff')
    dest = tmp_path / 'a.enc'

    # the key bytes go into the hash untouched, like the original tool
    assert main(['--compat', os.fsdecode(b'k\xffz'), str(src), str(dest)]) == 0
    assert dest.read_bytes() == bytes([17, 29, 65, 0, 255])

@pytest.mark.parametrize('opts', [[], ['--prng', 'aes'], ['--hash', 'stdhash'], ['--block', '0x3']])
def test_options_round_trip(tmp_path, plainfile, opts):
    dest = tmp_path / 'dest.bin'
    back = tmp_path / 'back.bin'

    assert main(opts + ['key', str(plainfile), str(dest)]) == 0
    assert main(opts + ['-d', 'key', str(dest), str(back)]) == 0
    assert back.read_bytes() == PLAIN

def test_profile(tmp_path, plainfile):
    prof = tmp_path / 'profile.yaml'
    prof.write_text('type: bitshift-profile\ncompat: true\n')
    dest = tmp_path / 'dest.bin'

    assert main(['--profile', str(prof), 'helloworld', str(plainfile), str(dest)]) == 0
    assert dest.read_bytes() == encrypt(PLAIN, 'helloworld', hashname='stdhash', prng='glibc')

def test_flags_override_profile(tmp_path, plainfile):
    prof = tmp_path / 'profile.yaml'
    prof.write_text('type: bitshift-profile\nhash: stdhash\nprng: glibc\n')
    dest = tmp_path / 'dest.bin'

    assert main(['--profile', str(prof), '--prng', 'mt', 'helloworld', str(plainfile), str(dest)]) == 0
    assert dest.read_bytes() == encrypt(PLAIN, 'helloworld', hashname='stdhash', prng='mt')

def test_bad_profile(tmp_path, plainfile, capsys):
    prof = tmp_path / 'profile.yaml'
    prof.write_text('type: tone-config\n')

    assert main(['--profile', str(prof), 'key', str(plainfile), str(tmp_path / 'out')]) == 1
    assert 'not a bitshift profile' in capsys.readouterr().err
    assert not (tmp_path / 'out').exists()

def test_missing_input(tmp_path, capsys):
    out = tmp_path / 'out'
    assert main(['key', str(tmp_path / 'nope.txt'), str(out)]) == 2
    assert 'cannot be read' in capsys.readouterr().err
    assert not out.exists()

def test_unwritable_output(tmp_path, plainfile, capsys):
    assert main(['key', str(plainfile), str(tmp_path / 'no' / 'such' / 'dir')]) == 2
    assert 'cannot be written' in capsys.readouterr().err

def test_empty_file(tmp_path):
    src = tmp_path / 'empty'
    src.write_bytes(b'')
    dest = tmp_path / 'empty.enc'

    assert main(['key', str(src), str(dest)]) == 0
    assert dest.read_bytes() == b''

def test_stdin_stdout(monkeypatch, capsysbinary):
    monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(PLAIN)))

    assert main(['helloworld', '-', '-']) == 0
    assert capsysbinary.readouterr().out == encrypt(PLAIN, 'helloworld')

def test_verbose(tmp_path, capsys):
    src = tmp_path / 'a.txt'
    src.write_bytes(b'A')

    assert main(['-v', '--compat', 'helloworld', str(src), str(tmp_path / 'a.enc')]) == 0

    err = capsys.readouterr().err
    assert 'Encryption mode' in err
    assert 'A (65)\t->\tH (72)' in err
    assert '1 bytes processed' in err

def test_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main(['-h'])

    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert 'pseudorandomly swaps individual bits' in out
    assert 'bitshift -d helloworld dest.txt recovered.txt' in out

@pytest.mark.parametrize('argv', [
    [],
    ['key', 'input'],
    ['-x', 'key', 'input', 'output'],
    ['--prng', 'dice', 'key', 'input', 'output'],
    ['--block', '0', 'key', 'input', 'output'],
])
def test_usage_errors(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)

    assert exc.value.code == 2
