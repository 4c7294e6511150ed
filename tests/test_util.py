import pytest

from pyliquid._util import _debug_handler


def test_debug_handler_callback():
    messages = []
    _debug_handler('textcb', messages.append, 'hello')
    assert messages == ['DEBUG: hello']


def test_debug_handler_print(capsys):
    _debug_handler('text', None, 'hello')
    assert capsys.readouterr().out == 'DEBUG: hello\n'


def test_debug_handler_disabled(capsys):
    _debug_handler(None, None, 'hello')
    assert capsys.readouterr().out == ''


@pytest.mark.parametrize('flag, cb', [('verbose', None), ('textcb', None)])
def test_debug_handler_bad_setup(flag, cb):
    with pytest.raises(ValueError):
        _debug_handler(flag, cb, 'hello')
