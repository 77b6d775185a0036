"""
Constants and configuration values for the quiz sync agent.

This module centralizes page selectors, service endpoints and default
settings so the scraper, mutator and sync client agree on one contract.
"""

# Page structure contract
SELECTORS = {
    'group_title': 'body .row .col-12 h1',
    'group_code': 'body .row .row .col-12 div',
    'question_box': '.question-box',
    'answer_control': 'input[type="radio"]',
}

QUESTION_ID_ATTRIBUTE = 'data-id'

# Number of ancestor levels between a radio control and the element holding its label text
ANSWER_TEXT_DEPTH = 2

GROUP_CODE_DELIMITER = ':'

# Prefixes of answer-option lines inside a question container's text
ANSWER_LINE_PREFIXES = ('A:', 'B:', 'C:', 'D:')

# Collection service
DEFAULT_BASE_URL = 'http://localhost:5000/api'

ENDPOINTS = {
    'data': '/data',
    'upload': '/upload',
}

UPLOAD_CONTENT_TYPE = 'text/json'

# Missing question-id handling
MISSING_ID_SKIP = 'skip'
MISSING_ID_FAIL = 'fail'
MISSING_ID_POLICIES = (MISSING_ID_SKIP, MISSING_ID_FAIL)

# Browser timeouts (milliseconds)
TIMEOUTS = {
    'page_load': 60000,
    'start_wait': 30000,
    'click': 5000,
}

# File Paths and Names
DEFAULT_PATHS = {
    'config_file': 'config/settings.json',
    'log_file': 'logs/quizsync.log',
}

DEFAULT_SETTINGS = {
    'sync': {
        'base_url': DEFAULT_BASE_URL,
        'api_key': '',
        'token': None,
        'timeout': None,
    },
    'scraper': {
        'missing_id_policy': MISSING_ID_SKIP,
        'verbose': False,
        'seed': None,
    },
    'browser': {
        'headless': True,
        'start_selector': None,
        'submit_selector': None,
        'navigation_timeout': TIMEOUTS['page_load'],
    },
    'logging': {
        'level': 'INFO',
        'file': DEFAULT_PATHS['log_file'],
        'max_size': 10485760,
        'backup_count': 5,
    },
}
