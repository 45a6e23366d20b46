# src/factordb/client.py
"""
Blocking API client for the FactorDB web service.

    >>> from factordb import FactorDbClient
    >>> FactorDbClient().get(42).factors_flattened()
    [2, 3, 7]

Every call issues exactly one GET and is independent of the others: the
client keeps no per-call state, so a single instance may be shared between
threads. Pass a ``requests.Session`` to reuse keep-alive connections.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from time import perf_counter
from typing import Any

import requests

from factordb.config import DEFAULT_ENDPOINT, DEFAULTS
from factordb.errors import HttpError
from factordb.number import FactorizationResult
from factordb.runtime import CFG, debug_print
from factordb.utility import apply_max_digits, to_query_string


class FactorDbClient:
    """Thin wrapper around ``GET <endpoint>?query=<n>``."""

    def __init__(
        self,
        session: requests.Session | None = None,
        endpoint: str | None = None,
        timeout: float | None = None,
    ):
        """
        Parameters:
            session:  optional requests.Session; without one each call goes
                      through requests.get()
            endpoint: API URL (default: API.ENDPOINT, then factordb.com)
            timeout:  seconds per request (default: API.TIMEOUT, then none)

        Also raises Python's int<->str digit guard to BEHAVIOUR.MAX_DIGITS
        so numbers past 4300 digits can be queried and parsed.
        """
        apply_max_digits(CFG("BEHAVIOUR.MAX_DIGITS", DEFAULTS["BEHAVIOUR"]["MAX_DIGITS"]))
        self.session = session
        self.endpoint = endpoint or CFG("API.ENDPOINT", None) or DEFAULT_ENDPOINT
        self.timeout = timeout if timeout is not None else CFG("API.TIMEOUT", None)
        debug_print(f"client for {self.endpoint} (timeout={self.timeout}, session={'yes' if session else 'no'})")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint={self.endpoint!r}, timeout={self.timeout!r})"

    # --- requests ----------------------------------------------------------

    def url_for(self, number: int | str) -> str:
        """The full request URL for ``number``."""
        req = requests.Request("GET", self.endpoint, params={"query": to_query_string(number)})
        return req.prepare().url

    def get(self, number: int | str) -> FactorizationResult:
        """
        Query FactorDB for ``number`` (int of any width, or decimal string).

        Raises:
            UserInputError: ``number`` is not a non-negative integer (no request is made)
            HttpError:      connection failure, timeout or non-2xx status
            ParseError:     the body is not a valid factorization record
        """
        query = to_query_string(number)
        response = self._fetch(query)
        return FactorizationResult.from_text(response.content, number=query)

    def get_json(self, number: int | str) -> str:
        """Same request as get(), returning the raw response body."""
        query = to_query_string(number)
        return self._fetch(query).text

    def get_many(self, numbers: Iterable[int | str], max_workers: int | None = None) -> list[FactorizationResult]:
        """
        Run get() for each number on a thread pool. Results keep input
        order; the first failure propagates. All inputs are validated
        before any request is sent.
        """
        queries = [to_query_string(n) for n in numbers]
        if not queries:
            return []
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            # one context copy per task so runtime settings reach the workers
            futures = [pool.submit(contextvars.copy_context().run, self.get, q) for q in queries]
            return [f.result() for f in futures]

    # --- transport ---------------------------------------------------------

    def _fetch(self, query: str) -> Any:
        http = self.session if self.session is not None else requests
        debug_print(f"GET {self.endpoint}?query={query}")
        t0 = perf_counter()
        try:
            response = http.get(self.endpoint, params={"query": query}, timeout=self.timeout)
        except requests.Timeout as e:
            raise HttpError(f"request to {self.endpoint} timed out after {self.timeout}s", e) from e
        except requests.RequestException as e:
            raise HttpError(f"request to {self.endpoint} failed: {e}", e) from e

        dt_ms = (perf_counter() - t0) * 1000.0
        debug_print(f"HTTP {response.status_code} in {dt_ms:.1f} ms")

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise HttpError(
                f"{self.endpoint} answered HTTP {response.status_code}",
                e,
                status_code=response.status_code,
            ) from e
        return response
