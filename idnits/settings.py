# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

# Default settings for idnits.  Local overrides go in idnits/settings_local.py,
# which is imported at the end of this file.

# Remote services
RFC_EDITOR_BASE_URL = 'https://www.rfc-editor.org'
RFC_INFO_URL = RFC_EDITOR_BASE_URL + '/rfc/rfc{number}.json'
RFC_INFO_PAGE_URL = RFC_EDITOR_BASE_URL + '/info/rfc{number}'

IDTRACKER_BASE_URL = 'https://datatracker.ietf.org'
DRAFT_INFO_URL = IDTRACKER_BASE_URL + '/doc/{name}/doc.json'
DOC_PAGE_URL = IDTRACKER_BASE_URL + '/doc/{name}'
DOWNREF_REGISTRY_URL = IDTRACKER_BASE_URL + '/doc/downref/'

# python-requests doc recommends slightly > a multiple of 3 seconds
REQUESTS_TIMEOUT = 3.01

# Reference pages quoted in nit messages
AUTHORS_GUIDE_URL = 'https://authors.ietf.org'
RFCXML_VOCABULARY_URL = AUTHORS_GUIDE_URL + '/en/rfcxml-vocabulary'
REQUIRED_CONTENT_URL = AUTHORS_GUIDE_URL + '/en/required-content'
TRUST_LICENSE_INFO_URL = 'https://trustee.ietf.org/license-info'

# Thresholds
MAX_LINE_LENGTH = 72
MAX_AUTHORS = 5
MAX_RAGGED_LINES = 50
MAX_FILENAME_LENGTH = 50
DATE_TOLERANCE_DAYS = 3

# Logging
LOGGER_NAME = 'idnits'
LOG_FORMAT = '{levelname}: {name}:{lineno}: {message}'

# Site-specific changes, such as a local mirror of the remote services.
try:
    from idnits.settings_local import *  # pyflakes:ignore pylint: disable=wildcard-import
except ImportError:
    pass
