import socket
import threading

from dictclient.net.channel import LineChannel


class ScriptedChannel(LineChannel):
    """In-memory channel replaying canned server lines and recording what the client sent."""

    def __init__(self, lines=(), fail_on_send=None):
        self.replies = list(lines)
        self.sent = []
        self.closed = False
        self._fail_on_send = fail_on_send

    def feed(self, text: str):
        lines = text.split('\r\n')
        if lines[-1] == '':
            lines.pop()
        self.replies.extend(lines)

    def send_line(self, line: str):
        if self._fail_on_send is not None:
            raise self._fail_on_send
        self.sent.append(line)

    def read_line(self):
        if not self.replies:
            return None
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self):
        self.closed = True


def scripted(text: str = '220 test server <auth.mime> <1@example.org>\r\n', **kwargs):
    channel = ScriptedChannel(**kwargs)
    channel.feed(text)
    return channel


class FakeDictServer(object):
    """
    Tiny DICT server on localhost serving one client. `replies` maps a command line to the
    raw text sent back.
    """

    def __init__(self, replies: dict, banner='220 hello\r\n'):
        self._replies = replies
        self._banner = banner
        self.received = []
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.bind(('127.0.0.1', 0))
        self._sock.listen(1)
        self.port = self._sock.getsockname()[1]
        self._th = threading.Thread(target=self._serve, daemon=True)
        self._th.start()

    def _serve(self):
        cli, _ = self._sock.accept()
        with cli, cli.makefile('rb') as reader:
            cli.sendall(self._banner.encode('utf-8'))
            for raw in reader:
                line = raw.decode('utf-8').rstrip('\r\n')
                self.received.append(line)
                if line == 'QUIT':
                    cli.sendall(b'221 bye\r\n')
                    break
                cli.sendall(self._replies.get(line, '500 unknown command\r\n').encode('utf-8'))

    def stop(self):
        self._th.join(timeout=5)
        self._sock.close()
