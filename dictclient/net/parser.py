"""
Parsers for replies transported through network.
Every reply of a DICT server starts with a status line, `<code> <text>`. Replies carrying
data then continue in one of two shapes:
- record list: payload lines follow the status line, until a line carrying the terminal
  status (`250 ok`). DEFINE, MATCH, SHOW DB and SHOW STRATEGIES answer this way.
- text block: free text lines follow, ended by a line holding only `.`, then the `250`
  status line. SHOW INFO answers this way.
Classifying a single line is kept apart from reading lines, so the grammars below don't
need a socket to be exercised.
"""
import enum
import re
from collections import namedtuple

from dictclient.constants import TEXT_END
from dictclient.model import Definition, Database, MatchingStrategy
from dictclient.net.utils import StreamClosedError

_STATUS_PATTERN = re.compile(r'(\d{3})(?: |$)')
_DEFINITION_PATTERN = re.compile(r'151 "(?P<word>.+?)" (?P<database>\S+) "(?P<description>.*)"')
_MATCH_PATTERN = re.compile(r'(?P<database>[\w-]+) "(?P<word>.+)"')
_DATABASE_PATTERN = re.compile(r'(?P<name>[\w-]+) "(?P<description>.+)"')
_STRATEGY_PATTERN = re.compile(r'(?P<name>\w+) "(?P<description>.+)"')


class LineKind(enum.Enum):
    NO_MATCH = 0
    STARTS_RECORD = 1
    CONTINUES_RECORD = 2
    ENDS_RECORD = 3


LineMatch = namedtuple('LineMatch', ['kind', 'fields'])

NO_MATCH = LineMatch(LineKind.NO_MATCH, ())
ENDS_RECORD = LineMatch(LineKind.ENDS_RECORD, ())


def status_code(line: str):
    """
    :return: the leading three-digit status code as int, None if the line doesn't carry one.
    """
    m = _STATUS_PATTERN.match(line)
    return int(m.group(1)) if m else None


def has_status(line: str, prefix: str) -> bool:
    """
    True if line starts with `prefix` as a whole token, so `2500 BC` is not a `250` line
    while `250 ok [d/m/c = 1/0/20]` is.
    """
    return line == prefix or line.startswith(prefix + ' ')


def classify_definition_line(line: str, in_record: bool) -> LineMatch:
    if line == TEXT_END:
        return ENDS_RECORD
    m = _DEFINITION_PATTERN.match(line)
    if m:
        return LineMatch(LineKind.STARTS_RECORD, (m.group('word'), m.group('database')))
    if in_record:
        return LineMatch(LineKind.CONTINUES_RECORD, (line,))
    return NO_MATCH


def _classify_pair(pattern, line: str, *groups) -> LineMatch:
    m = pattern.fullmatch(line)
    if m:
        return LineMatch(LineKind.STARTS_RECORD, tuple(m.group(g) for g in groups))
    return NO_MATCH


def classify_match_line(line: str) -> LineMatch:
    return _classify_pair(_MATCH_PATTERN, line, 'database', 'word')


def classify_database_line(line: str) -> LineMatch:
    return _classify_pair(_DATABASE_PATTERN, line, 'name', 'description')


def classify_strategy_line(line: str) -> LineMatch:
    return _classify_pair(_STRATEGY_PATTERN, line, 'name', 'description')


class DefinitionCollector(object):
    """
    Gather `151` blocks into Definitions. A block opens at its `151` line and closes at
    the next `.` line; anything in between is body text.
    """
    __slots__ = ('_definitions', '_current')

    def __init__(self):
        self._definitions = []
        self._current = None

    def feed(self, line: str):
        match = classify_definition_line(line, self._current is not None)
        if match.kind is LineKind.STARTS_RECORD:
            word, database = match.fields
            self._current = (word, database, [])
        elif match.kind is LineKind.CONTINUES_RECORD:
            self._current[2].append(line)
        elif match.kind is LineKind.ENDS_RECORD and self._current is not None:
            word, database, body = self._current
            self._definitions.append(Definition(word, database, '\n'.join(body)))
            self._current = None

    def result(self):
        return self._definitions


class MatchCollector(object):
    """Distinct headwords, in the order the server sent them."""
    __slots__ = ('_words',)

    def __init__(self):
        self._words = dict()

    def feed(self, line: str):
        match = classify_match_line(line)
        if match.kind is LineKind.STARTS_RECORD:
            self._words.setdefault(match.fields[1], None)

    def result(self):
        return list(self._words)


class DatabaseCollector(object):
    __slots__ = ('_databases',)

    def __init__(self):
        self._databases = dict()

    def feed(self, line: str):
        match = classify_database_line(line)
        if match.kind is LineKind.STARTS_RECORD:
            name, description = match.fields
            # a name seen twice keeps the latest description
            self._databases[name] = Database(name, description)

    def result(self):
        return self._databases


class StrategyCollector(object):
    __slots__ = ('_strategies',)

    def __init__(self):
        self._strategies = dict()

    def feed(self, line: str):
        match = classify_strategy_line(line)
        if match.kind is LineKind.STARTS_RECORD:
            name, description = match.fields
            self._strategies.setdefault(name, MatchingStrategy(name, description))

    def result(self):
        return list(self._strategies.values())


def read_until(channel, stop):
    """
    Yield lines read from channel until `stop(line)` is true. The stopping line is
    consumed but not yielded.
    :raise StreamClosedError: stream ends before the stopping line shows up.
    """
    while True:
        line = channel.read_line()
        if line is None:
            raise StreamClosedError()
        if stop(line):
            return
        yield line


def read_records(channel, terminal: str, collector):
    """
    Feed every line up to the `terminal` status line into collector.
    :return: whatever the collector gathered.
    """
    for line in read_until(channel, lambda l: has_status(l, terminal)):
        collector.feed(line)
    return collector.result()


def read_text_block(channel, terminal: str = '250') -> str:
    """
    Read a text block verbatim up to the `.` line, then skip everything up to and
    including the `terminal` status line.
    """
    lines = list(read_until(channel, lambda l: l == TEXT_END))
    for _ in read_until(channel, lambda l: has_status(l, terminal)):
        pass
    return '\n'.join(lines)
