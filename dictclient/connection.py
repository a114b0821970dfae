"""
This file include the main interface of dictclient.
"""
import logging
import re

import rwlock

from dictclient.constants import *
from dictclient.model import ALL_DATABASES
from dictclient.net.channel import SocketChannel
from dictclient.net.parser import DefinitionCollector, MatchCollector, DatabaseCollector, StrategyCollector, \
    read_records, read_text_block, status_code, has_status
from dictclient.net.utils import DictError, DictConnectionError, ProtocolError, StreamClosedError, ClosedError, \
    quote_word, check_name

logger = logging.getLogger(DEFAULT_LOGGER_NAME)

_BANNER_PATTERN = re.compile(r'220 (.*\S.*)')


class DictConnection(object):
    """
    One connection to a DICT server (RFC 2229). The server pairs replies with commands
    only by their order on the stream, so every command holds the connection's lock
    until its reply is fully read; calls from several threads run one after another.
    After any error the connection should be closed and a new one opened.
    """

    def __init__(self, host: str, port: int = DEFAULT_PORT, *, channel=None, timeout=None):
        """
        :param host: name of the host running the DICT server.
        :param port: port the server listens on.
        :param channel: already connected LineChannel to talk through, host and port are
                        then only used in messages.
        :param timeout: socket timeout in seconds, None blocks forever.
        """
        self._lock = rwlock.RWLock()
        self._closed = True
        self._channel = channel if channel is not None else SocketChannel(host, port, timeout=timeout)
        try:
            self._welcome = self._read_banner(host, port)
        except Exception:
            self._channel.close()
            raise
        self._closed = False

    def _read_banner(self, host, port) -> str:
        try:
            line = self._channel.read_line()
        except OSError as error:
            raise DictConnectionError('Failed to get message from {0}:{1}'.format(host, port)) from error
        if line is None:
            raise DictConnectionError("Server {0}:{1} didn't respond with a message".format(host, port))
        m = _BANNER_PATTERN.fullmatch(line)
        if not m:
            raise ProtocolError('unexpected response from server')
        logger.info('welcome msg: {0}'.format(m.group(1)))
        return m.group(1)

    @property
    def transaction(self):
        class Transaction:
            def __enter__(_self):
                self._lock.writer_lock.acquire()
                if self._closed:
                    self._lock.writer_lock.release()
                    raise ClosedError('connection has been closed')

            def __exit__(_self, exc_type, exc_val, exc_tb):
                self._lock.writer_lock.release()
                # socket failures surface as connection errors, like any other I/O trouble
                if exc_type is not None and issubclass(exc_type, OSError) \
                        and not issubclass(exc_type, DictError):
                    raise DictConnectionError('Encountered I/O error: {0}'.format(exc_val)) from exc_val

        return Transaction()

    def _command(self, line: str):
        """Send one command line and return the status code of the reply's first line."""
        logger.debug('send: {0}'.format(line))
        self._channel.send_line(line)
        reply = self._channel.read_line()
        if reply is None:
            raise StreamClosedError()
        return status_code(reply)

    def define(self, word: str, database=ALL_DATABASES):
        """
        :param word: word to look up.
        :param database: database record or name, '*' searches all databases, '!' stops at
                         the first database holding a definition.
        :return: list of Definition in the order sent by the server, empty if the
                 database doesn't exist or nothing was found.
        """
        cmd = 'DEFINE {0} {1}'.format(check_name(database), quote_word(word))
        with self.transaction:
            status = self._command(cmd)
            if status in (INVALID_DATABASE, NO_MATCH):
                return []
            if status != DEFINITIONS_RETRIEVED:
                raise ProtocolError('unexpected response from server')
            return read_records(self._channel, str(OK), DefinitionCollector())

    def match(self, word: str, strategy=DEFAULT_STRATEGY, database=ALL_DATABASES):
        """
        :param word: word, or pattern, to match.
        :param strategy: strategy record or name (e.g. 'exact', 'prefix'), '.' lets the
                         server pick its default.
        :param database: database record or name, '*' and '!' as in define().
        :return: distinct matching headwords, in the order sent by the server.
        """
        cmd = 'MATCH {0} {1} {2}'.format(check_name(database), check_name(strategy), quote_word(word))
        with self.transaction:
            status = self._command(cmd)
            if status in (INVALID_DATABASE, INVALID_STRATEGY, NO_MATCH):
                return []
            if status != MATCHES_FOUND:
                raise ProtocolError('unexpected response from server')
            return read_records(self._channel, '250 ok', MatchCollector())

    def get_databases(self):
        """
        :return: dict mapping database name to Database, for all databases on the server.
        """
        with self.transaction:
            status = self._command('SHOW DB')
            if status == NO_DATABASES:
                return {}
            if status != DATABASES_PRESENT:
                raise ProtocolError('unexpected response from server')
            return read_records(self._channel, '250 ok', DatabaseCollector())

    def get_strategies(self):
        """
        :return: list of MatchingStrategy supported by the server.
        """
        with self.transaction:
            status = self._command('SHOW STRATEGIES')
            if status == NO_STRATEGIES:
                return []
            if status != STRATEGIES_AVAILABLE:
                raise ProtocolError('unexpected response from server')
            return read_records(self._channel, '250 ok', StrategyCollector())

    def get_database_info(self, database) -> str:
        """
        :return: the server's description of `database`, as sent, lines joined by '\\n'.
        """
        name = check_name(database)
        with self.transaction:
            status = self._command('SHOW INFO {0}'.format(name))
            if status == DATABASE_INFO:
                return read_text_block(self._channel, str(OK))
            if status == INVALID_DATABASE:
                raise ProtocolError('invalid database: {0}'.format(name))
            raise ProtocolError('unexpected message from server')

    def close(self):
        """
        Say QUIT and release the transport. Best effort: nothing raised while quitting is
        passed to the caller, it's only logged. Closing twice does nothing.
        """
        self._lock.writer_lock.acquire()
        try:
            if self._closed:
                return
            self._closed = True
            try:
                self._channel.send_line('QUIT')
                while True:
                    line = self._channel.read_line()
                    # server gone before saying goodbye is as good as goodbye
                    if line is None or has_status(line, str(GOODBYE)):
                        break
            except Exception as error:
                logger.debug('ignored error while quitting: {0!r}'.format(error))
            try:
                self._channel.close()
            except Exception as error:
                logger.debug('ignored error while closing channel: {0!r}'.format(error))
            logger.info('Connection has been closed.')
        finally:
            self._lock.writer_lock.release()

    @property
    def is_open(self):
        return not self._closed

    @property
    def welcome(self):
        """Greeting text the server sent after its 220 code."""
        return self._welcome

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return self.close()
