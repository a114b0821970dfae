from dictclient.connection import DictConnection
from dictclient.constants import DEFAULT_PORT, METHODS_TO_LOG
from dictclient.model import Definition, Database, MatchingStrategy, ALL_DATABASES, FIRST_MATCH
from dictclient.net.utils import DictError, DictConnectionError, ProtocolError, StreamClosedError, ClosedError
from dictclient.wrapper import log_wrapper

__version__ = '1.0.0'

__all__ = ('DictConnection', 'Definition', 'Database', 'MatchingStrategy', 'ALL_DATABASES', 'FIRST_MATCH',
           'DictError', 'DictConnectionError', 'ProtocolError', 'StreamClosedError', 'ClosedError', 'connect')


def connect(host: str, port: int = DEFAULT_PORT, *, timeout=None, **kwargs):
    """
    Open a connection to the DICT server at host:port.
    :param kwargs: log mode: 'log'='local' (log in local file (log.log))
                             'log'='tcp' or 'udp': log to 'log_host' & 'log_port'
                   'channel': an already connected LineChannel to use instead of a socket
    """
    conn = DictConnection(host, port, channel=kwargs.pop('channel', None), timeout=timeout)
    log_mode = kwargs.pop('log', None)

    if log_mode is not None:
        try:
            conn = log_wrapper(conn, METHODS_TO_LOG, log_mode=log_mode, host=kwargs.pop('log_host', None),
                               port=kwargs.pop('log_port', None))
        except ValueError:
            conn.close()
            raise

    return conn
