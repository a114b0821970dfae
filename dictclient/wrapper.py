"""
Log wrapper record the commands issued on a connection along with their arguments, time and
outcome. It's just a wrapper used like function-wrapper, bound onto one connection instance
so other connections stay untouched.
"""
import datetime
import functools
import logging
import os
from logging import handlers as log_handlers

_log_file_name = 'log.log'

# if in debug mode
if __debug__:

    def _log_wrapper(func, logger: logging.Logger):
        logger.setLevel(logging.DEBUG)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = 'Called: ' + func.__name__ + '('
            # !r means call __repr__ only / !s means call __str__ only
            log += ','.join(['{0!r}'.format(a) for a in args] + ['{0!s}={1!r}'.format(k, v) for k, v in
                                                                 kwargs.items()])
            exception = None
            try:
                return func(*args, **kwargs)
            except Exception as error:
                exception = error
                raise
            finally:
                log += ')' if exception is None else ") {0}: {1}".format(type(exception), exception)
                log += ' at {time}'.format(time=datetime.datetime.now().isoformat())
                logger.debug(log)

        return wrapper

else:
    def _log_wrapper(func, logger: logging.Logger):
        logger.setLevel(logging.INFO)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = 'Called:' + func.__name__ + '('
            log += ','.join(['{0}'.format(a) for a in args] + ['{0}={1}'.format(k, v) for k, v in
                                                               kwargs.items()])
            log += ') at {time}'.format(time=datetime.datetime.now().isoformat())
            logger.info(log)
            return func(*args, **kwargs)

        return wrapper


def log_wrapper(conn, methods_to_log: tuple, log_mode='local', host=None, port=None):
    """
    :param conn: connection instance to be logged
    :param methods_to_log: methods of instance to be logged (both method name, parameters, time
                           of invoking will be logged)
    :param log_mode: 'local': log in local file (log.log)
                     'tcp' or 'udp': log to concrete host & port
    :param host: target host if log mode is 'tcp' or 'udp'
    :param port: port of target host if log mode is 'tcp' or 'udp'
    :return: wrapped instance
    """
    # one logger per connection, so records of one never reach the handler of another
    logger = logging.getLogger('{0}.{1}'.format(conn.__class__.__name__, id(conn)))
    if log_mode == 'tcp' or log_mode == 'udp':
        if host is None or port is None:
            raise ValueError('Host and port of Log Socket should be specified')
        handler = log_handlers.SocketHandler(host=host,
                                             port=port) if log_mode == 'tcp' else log_handlers.DatagramHandler(
            host=host, port=port)
    elif log_mode == 'local':
        handler = logging.FileHandler(os.path.abspath(_log_file_name), mode='a')
    else:
        raise ValueError('Unknown log mode: {0!r}'.format(log_mode))
    logger.addHandler(handler)

    for name in methods_to_log:
        method = getattr(conn, name, None)
        if method is not None:
            # instance attribute shadows the class method for this connection only
            setattr(conn, name, _log_wrapper(method, logger))

    _detach_on_close(conn, logger, handler)

    # bind logger with instance, so as to close log-handler when connection closes
    conn._logger = logger
    conn._log_handler = handler
    return conn


def _detach_on_close(conn, logger: logging.Logger, handler: logging.Handler):
    """Release the handler once close() returns, after its own call record was written."""
    close = conn.close

    @functools.wraps(close)
    def wrapper(*args, **kwargs):
        try:
            return close(*args, **kwargs)
        finally:
            logger.removeHandler(handler)
            handler.close()

    conn.close = wrapper
