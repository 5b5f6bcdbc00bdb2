# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-
"""Lookups of document metadata at the RFC Editor and the datatracker

Every lookup is a coroutine which runs the blocking request in a worker
thread, so that the checks can wait on several of them at once.  Results
are cached per URL for the lifetime of the RemoteLookup instance, and
concurrent requests for the same URL share a single fetch.  Failures
are logged and returned as None; they never abort a run.
"""
import asyncio
import logging
import re

from contextlib import AbstractContextManager
from json import JSONDecodeError

import requests

from pyquery import PyQuery

from idnits import settings
from idnits.log import log

REGISTRY_LINK_RE = re.compile(r'/doc/(rfc\d+|draft-[a-z0-9-]+?)(?:-\d{2})?/?$', re.I)


class RemoteLookup(AbstractContextManager):

    def __init__(self, offline=False, request_timeout=settings.REQUESTS_TIMEOUT):
        self.offline = offline
        self.request_timeout = request_timeout
        self._session = requests.Session()
        self._cache = {}

    def close(self):
        self._session.close()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _request(self, url):
        """Execute a GET request, returning the response or None"""
        try:
            response = self._session.get(url, timeout=self.request_timeout)
        except requests.RequestException as err:
            log("Request for %s failed" % url, level=logging.WARNING, e=err)
            return None
        if response.status_code != 200:
            log("Request for %s failed (HTTP status code = %s)" % (url, response.status_code),
                level=logging.INFO if response.status_code == 404 else logging.WARNING)
            return None
        return response

    def _get_json(self, url):
        response = self._request(url)
        if response is None:
            return None
        try:
            return response.json()
        except (JSONDecodeError, ValueError) as err:
            log("Error decoding response from %s as JSON" % url, level=logging.WARNING, e=err)
        return None

    def _get_text(self, url):
        response = self._request(url)
        return None if response is None else response.text

    async def _fetch(self, url, get):
        if self.offline:
            return None
        if not url in self._cache:
            self._cache[url] = asyncio.ensure_future(asyncio.to_thread(get, url))
        return await self._cache[url]

    async def rfc_info(self, number):
        """Status information for an RFC:
          {'status': str or None, 'obsoleted_by': [str, ...], 'updated_by': [str, ...]}
        or None if it can't be fetched."""
        data = await self._fetch(settings.RFC_INFO_URL.format(number=int(number)), self._get_json)
        if not isinstance(data, dict):
            return None
        return {
            'status': data.get('status') or None,
            'obsoleted_by': normalize_rfc_list(data.get('obsoleted_by')),
            'updated_by': normalize_rfc_list(data.get('updated_by')),
        }

    async def draft_info(self, name):
        """{'state': str or None} for a draft, or None if it can't be fetched."""
        data = await self._fetch(settings.DRAFT_INFO_URL.format(name=name), self._get_json)
        if not isinstance(data, dict):
            return None
        return {
            'state': data.get('state') or None,
        }

    async def downref_registry(self):
        """The set of labels ('RFC 1234', 'draft-foo-bar') in the downref
        registry, or None if it can't be fetched."""
        html = await self._fetch(settings.DOWNREF_REGISTRY_URL, self._get_text)
        if html is None:
            return None
        return parse_downref_registry(html)

    async def downrefs(self, labels):
        "The subset of the given labels which are in the downref registry"
        registry = await self.downref_registry()
        if not registry:
            return []
        return [ l for l in labels if normalize_label(l) in registry ]


def normalize_rfc_list(values):
    "The non-empty entries of a list of RFC references, as strings, as given"
    return [ str(v).strip() for v in values or [] if str(v).strip() ]


def normalize_label(label):
    match = re.match(r'^rfc\s?(\d+)$', label.strip(), re.I)
    if match:
        return 'RFC %d' % int(match.group(1))
    return label.strip().lower()


def parse_downref_registry(html):
    "Extract the document labels from the links of the downref registry page"
    labels = set()
    for a in PyQuery(html)('a[href]').items():
        match = REGISTRY_LINK_RE.search(a.attr('href'))
        if match:
            labels.add(normalize_label(match.group(1)))
    return labels
