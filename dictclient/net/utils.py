class DictError(Exception):
    pass


class DictConnectionError(DictError, ConnectionError):
    """Raise when the server can't be reached, or the transport fails in the middle of a call"""
    pass


class ProtocolError(DictError):
    """Raise when the server answers with something the command doesn't expect"""
    pass


class StreamClosedError(ProtocolError):
    """Raise when the server closes the stream before the reply is complete"""

    def __init__(self, msg='connection closed unexpectedly'):
        super().__init__(msg)


class ClosedError(DictError):
    """Raise when trying to send a command but connection was closed"""
    pass


_FORBIDDEN_IN_WORD = ('"', '\r', '\n')


def quote_word(word: str) -> str:
    """
    Wrap a word in double quotes for DEFINE and MATCH. The protocol has no escape for
    a quote inside a quoted string, so such words are refused rather than sent mangled.
    """
    if any(c in word for c in _FORBIDDEN_IN_WORD):
        raise ValueError('word {0!r} contains a double quote or a line break'.format(word))
    return '"{0}"'.format(word)


def check_name(name) -> str:
    """
    Database and strategy names are sent bare, so they must be a single token.
    Records are accepted as well as plain strings.
    """
    name = getattr(name, 'name', name)
    if not isinstance(name, str):
        raise TypeError('name should be a str, got {0}'.format(type(name).__name__))
    if not name or any(c.isspace() or c == '"' for c in name):
        raise ValueError('invalid database or strategy name: {0!r}'.format(name))
    return name
