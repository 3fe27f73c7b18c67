"""Storage of historical test timing baselines.

The merged result of each run, with the times of failed tests filled in from earlier runs, is
saved as the baseline for the next one. The baseline lives either in a local file or at an
HTTP(S) URL that accepts PUT. Remote baselines are also kept in a local cache, compressed if
large enough, so an unreachable server doesn't lose the timing data.
"""

import functools
import io
import logging
import os
from typing import Optional
from urllib import parse

import requests

from gridresults import config
from gridresults import junitparse
from gridresults import junitwrite
from gridresults import netreq
from gridresults.resultdef import TestResult

import zstd


COMPRESS_EXT = '.zst'


def cache_file_name(url: str) -> str:
    return os.path.join(config.expand('timing_cache_path'), parse.quote(url, safe=''))


def write_cache(url: str, data: bytes):
    """Save a copy of a baseline in the cache, compressing it unless it's tiny."""
    path = cache_file_name(url)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    if len(data) > config.get('compress_threshold_bytes'):
        with open(path + COMPRESS_EXT, 'wb') as f:
            f.write(zstd.compress(data))
        if os.path.exists(path):
            os.unlink(path)
    else:
        with open(path, 'wb') as f:
            f.write(data)
        if os.path.exists(path + COMPRESS_EXT):
            os.unlink(path + COMPRESS_EXT)


def read_cache(url: str) -> Optional[bytes]:
    """Return the cached copy of a baseline, or None if there isn't one."""
    path = cache_file_name(url)
    try:
        with open(path + COMPRESS_EXT, 'rb') as f:
            return zstd.decompress(f.read())
    except FileNotFoundError:
        pass
    try:
        with open(path, 'rb') as f:
            return f.read()
    except FileNotFoundError:
        return None


def is_remote(location: str) -> bool:
    return parse.urlparse(location).scheme in ('http', 'https')


class TimingStore:
    """Retrieves and saves the timing baseline at one location."""

    def __init__(self, location: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        self.location = location if location is not None else config.expand('timing_path')
        self.session = session

    def enabled(self) -> bool:
        return bool(self.location)

    def get_session(self) -> requests.Session:
        if not self.session:
            self.session = netreq.Session()
        return self.session

    def fetch_remote(self) -> Optional[bytes]:
        try:
            resp = netreq.retry_on_exception(
                functools.partial(self.get_session().get, self.location,
                                  timeout=config.get('http_timeout')),
                requests.exceptions.ChunkedEncodingError, retries=3)
            if resp.status_code == 404:
                logging.info('No timing baseline found at %s', self.location)
                return None
            resp.raise_for_status()
        except requests.exceptions.RequestException as e:
            logging.warning('Cannot retrieve timing baseline %s: %s', self.location, e)
            data = read_cache(self.location)
            if data is not None:
                logging.warning('Using cached copy of the timing baseline')
            return data
        write_cache(self.location, resp.content)
        return resp.content

    def fetch_local(self) -> Optional[bytes]:
        try:
            with open(self.location, 'rb') as f:
                return f.read()
        except FileNotFoundError:
            logging.info('No timing baseline found at %s', self.location)
            return None
        except OSError as e:
            logging.warning('Cannot read timing baseline %s: %s', self.location, e)
            return None

    def download(self) -> Optional[TestResult]:
        """Return the previous run's timing baseline, or None if it isn't available."""
        if not self.enabled():
            logging.info('No timing path configured; skipping timing baseline')
            return None
        data = self.fetch_remote() if is_remote(self.location) else self.fetch_local()
        if data is None:
            return None
        try:
            return junitparse.parse_all_suites_xml(io.BytesIO(data))
        except junitparse.ParseError as e:
            logging.warning('Ignoring corrupt timing baseline %s: %s', self.location, e)
            return None

    def upload(self, result: TestResult):
        """Save the result as the timing baseline for the next run."""
        if not self.enabled():
            return
        data = junitwrite.to_string(result).encode('UTF-8')
        if is_remote(self.location):
            resp = self.get_session().put(
                self.location, data=data, timeout=config.get('http_timeout'),
                headers={'Content-Type': 'application/xml'})
            resp.raise_for_status()
            write_cache(self.location, data)
        else:
            if dirname := os.path.dirname(self.location):
                os.makedirs(dirname, exist_ok=True)
            with open(self.location, 'wb') as f:
                f.write(data)
        logging.info('Saved timing baseline of %d bytes to %s', len(data), self.location)
