# State key layout: contract.variable:key1:key2
INDEX_SEPARATOR = '.'
DELIMITER = ':'

# Reserved per-contract metadata variables
CODE_KEY = '__code__'
COMPILED_KEY = '__compiled__'
OWNER_KEY = '__owner__'
TIME_KEY = '__submitted__'

PRIVATE_METHOD_PREFIX = '__'
EXPORT_DECORATOR_STRING = 'export'
INIT_DECORATOR_STRING = 'construct'
INIT_FUNC_NAME = '__{}'.format(PRIVATE_METHOD_PREFIX)
VALID_DECORATORS = {EXPORT_DECORATOR_STRING, INIT_DECORATOR_STRING}

ORM_CLASS_NAMES = {'Variable', 'Hash'}

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024
