"""
Value records produced by the connection.
- Definition: one definition of a word, taken from one database.
- Database: a database served by the DICT server, keyed by name.
- MatchingStrategy: a strategy the server can use in MATCH, keyed by name.
"""
from collections import namedtuple

__all__ = ['Definition', 'Database', 'MatchingStrategy', 'ALL_DATABASES', 'FIRST_MATCH']

Definition = namedtuple('Definition', [
    'word',  # headword as echoed back by the server
    'database',  # name of the database the definition came from
    'body',  # definition text, lines joined by '\n'
])


class Database(namedtuple('Database', ['name', 'description'])):
    __slots__ = ()

    def __str__(self):
        return self.name


class MatchingStrategy(namedtuple('MatchingStrategy', ['name', 'description'])):
    __slots__ = ()

    def __str__(self):
        return self.name


# reserved names, never listed by SHOW DB
ALL_DATABASES = Database('*', 'All databases')
FIRST_MATCH = Database('!', 'First database with a match')
