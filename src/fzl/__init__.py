"""fzl — an embedded fuzzy-logic expression language with classes."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
