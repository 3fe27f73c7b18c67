"""Network API functions
"""

import logging
import time
from typing import Callable, Optional, Type

import requests
from requests import adapters

import gridresults


HTTPError = requests.exceptions.HTTPError

# The User-Agent: header to use
USER_AGENT = f'gridresults/{gridresults.__version__}'


def standard_headers(headers: Optional[dict[str, str]] = None) -> dict[str, str]:
    return {'User-Agent': USER_AGENT, **(headers or {})}


class Session(requests.Session):
    """Set up a requests session with a standard configuration"""

    def __init__(self, total: int = 4, backoff_factor: int = 10,
                 status_forcelist: Optional[list[int]] = None,
                 allowed_methods: Optional[list[str]] = None):
        super().__init__()
        if not status_forcelist:
            status_forcelist = [429, 500, 502, 503, 504]
        if not allowed_methods:
            # PUT is idempotent, so an upload can be safely retried
            allowed_methods = ['HEAD', 'GET', 'PUT', 'OPTIONS']

        # This should delay a total of 10+20+40+80 seconds before aborting
        retry_strategy = adapters.Retry(
            total=total, backoff_factor=backoff_factor, status_forcelist=status_forcelist,
            allowed_methods=allowed_methods)
        adapter = adapters.HTTPAdapter(max_retries=retry_strategy)
        self.mount('https://', adapter)
        self.mount('http://', adapter)
        self.headers.update(standard_headers())


def retry_on_exception(func: Callable, exception: Type[Exception],
                       retries: int = 10, delay: float = 10):
    """Retry a function call on an exception, with fixed delay"""
    for attempt in range(retries):
        try:
            return func()
        except exception as e:
            exc = e
            logging.info('Transfer attempt %d failed; retrying after delay', attempt)
            if attempt < retries - 1:
                time.sleep(delay)

    # all attempts raised an exception, so raise it now
    raise exc
