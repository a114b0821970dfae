import logging
import socket
from abc import ABCMeta, abstractmethod

from dictclient.constants import DEFAULT_LOGGER_NAME, ENCODING, LINE_END
from dictclient.net.utils import DictConnectionError

logger = logging.getLogger(DEFAULT_LOGGER_NAME)


class LineChannel(metaclass=ABCMeta):
    """
    Bidirectional text-line transport the connection talks through. Implementations
    block until a whole line is written or read.
    """

    @abstractmethod
    def send_line(self, line: str):
        pass

    @abstractmethod
    def read_line(self):
        """
        :return: next line without its line break, or None once the stream is closed.
        """
        pass

    @abstractmethod
    def close(self):
        pass


class SocketChannel(LineChannel):

    def __init__(self, host, port, timeout=None):
        """
        :param timeout: socket timeout in seconds applied to connect, reads and writes,
                        None blocks forever.
        """
        try:
            self._sock = socket.create_connection((host, port), timeout=timeout)
        except socket.gaierror as error:
            raise DictConnectionError('Unknown host: {0} {1}'.format(host, port)) from error
        except OSError as error:
            raise DictConnectionError('Unable to connect to {0}:{1}: {2}'.format(host, port, error)) from error
        self._reader = self._sock.makefile('rb')
        logger.debug('connected to {0}:{1}'.format(host, port))

    def send_line(self, line: str):
        self._sock.sendall((line + LINE_END).encode(ENCODING))

    def read_line(self):
        data = self._reader.readline()
        if not data:
            return None
        return data.decode(ENCODING, errors='replace').rstrip('\r\n')

    def close(self):
        try:
            self._reader.close()
        finally:
            self._sock.close()
