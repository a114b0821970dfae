__all__ = ['DEFAULT_PORT', 'ENCODING', 'LINE_END', 'TEXT_END', 'DEFAULT_STRATEGY', 'DEFAULT_LOGGER_NAME', 'METHODS_TO_LOG',
           'BANNER', 'GOODBYE', 'OK', 'DATABASES_PRESENT', 'STRATEGIES_AVAILABLE', 'DATABASE_INFO',
           'DEFINITIONS_RETRIEVED', 'DEFINITION_FOLLOWS', 'MATCHES_FOUND', 'INVALID_DATABASE', 'INVALID_STRATEGY',
           'NO_MATCH', 'NO_DATABASES', 'NO_STRATEGIES']

# port assigned to DICT by IANA (RFC 2229, section 3)
DEFAULT_PORT = 2628

# wire text is UTF-8, lines end with CRLF
ENCODING = 'utf-8'
LINE_END = '\r\n'

# a line holding only this ends a text block
TEXT_END = '.'

# '.' asks the server for its default strategy
DEFAULT_STRATEGY = '.'

DEFAULT_LOGGER_NAME = 'dictclient'

METHODS_TO_LOG = (
    'define',
    'match',
    'get_databases',
    'get_strategies',
    'get_database_info',
    'close'
)

# status codes, see RFC 2229 section 3
BANNER = 220
GOODBYE = 221
OK = 250

DATABASES_PRESENT = 110
STRATEGIES_AVAILABLE = 111
DATABASE_INFO = 112
DEFINITIONS_RETRIEVED = 150
DEFINITION_FOLLOWS = 151
MATCHES_FOUND = 152

INVALID_DATABASE = 550
INVALID_STRATEGY = 551
NO_MATCH = 552
NO_DATABASES = 554
NO_STRATEGIES = 555
