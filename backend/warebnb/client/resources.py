# Overview: Page-level client resources: the claims list and the dashboard home feed.

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..permissions.roles import WAREHOUSE_BROKER
from .api_client import ApiClient, ApiResult
from .query_cache import QueryCache


logger = logging.getLogger(__name__)

CLAIMS_KEY = ("claims",)
CLAIMS_STALE_TIME = 30.0


class _LoadFailed(Exception):
    pass


class ClaimsResource:
    """
    Claims list with cached reads.

    delete() patches every cached claims list in place on success so the
    page does not refetch; a failed delete leaves the cache untouched.
    """

    def __init__(self, api: ApiClient, cache: Optional[QueryCache] = None):
        self.api = api
        self.cache = cache if cache is not None else QueryCache()

    def list(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        """Cached claims, optionally by status. A failed load keeps the previous data and is retried next call."""
        key = CLAIMS_KEY + ((status,) if status else ())

        def fetcher():
            params = {"status": status} if status else None
            result = self.api.get("/api/v1/claims", params=params, show_toast=False)
            if not result.success:
                raise _LoadFailed(result.error)
            return result.data or []

        try:
            return self.cache.fetch(key, fetcher, stale_time=CLAIMS_STALE_TIME)
        except _LoadFailed as exc:
            logger.error("Failed to load claims: %s", exc)
            return self.cache.get_query_data(key) or []

    def submit(self, payload: Dict[str, Any]) -> ApiResult:
        result = self.api.post("/api/v1/claims", payload, success_message="Claim submitted")
        if result.success:
            self.cache.invalidate(CLAIMS_KEY)
        return result

    def update(self, claim_id: int, payload: Dict[str, Any]) -> ApiResult:
        result = self.api.patch(f"/api/v1/claims/{claim_id}", payload, success_message="Claim updated")
        if result.success and isinstance(result.data, dict):
            updated = result.data
            for key in self.cache.keys(CLAIMS_KEY):
                self.cache.set_query_data(
                    key,
                    lambda claims: [updated if c.get("id") == claim_id else c for c in (claims or [])],
                )
        return result

    def delete(self, claim_id: int) -> ApiResult:
        result = self.api.delete(f"/api/v1/claims/{claim_id}", success_message="Claim deleted")
        if result.success:
            for key in self.cache.keys(CLAIMS_KEY):
                self.cache.set_query_data(
                    key,
                    lambda claims: [c for c in (claims or []) if c.get("id") != claim_id],
                )
        return result


@dataclass
class DashboardData:
    bookings: List[Dict[str, Any]] = field(default_factory=list)
    invoices: List[Dict[str, Any]] = field(default_factory=list)
    claims: List[Dict[str, Any]] = field(default_factory=list)
    profile: Optional[Dict[str, Any]] = None


class DashboardFeed:
    """
    Loads the dashboard home lists in parallel, without toasts.

    A failed request leaves its slot empty. Brokers skip bookings,
    invoices and claims.
    """

    SOURCES = {
        "bookings": "/api/v1/bookings",
        "invoices": "/api/v1/invoices",
        "claims": "/api/v1/claims",
    }

    def __init__(self, api: ApiClient, max_workers: int = 4):
        self.api = api
        self.max_workers = max_workers

    def _get_list(self, path: str) -> List[Dict[str, Any]]:
        result = self.api.get(path, show_toast=False)
        if not result.success or not isinstance(result.data, list):
            return []
        return result.data

    def _get_profile(self) -> Optional[Dict[str, Any]]:
        result = self.api.get("/api/v1/users/me", show_toast=False)
        return result.data if result.success else None

    def load(self, role: Optional[str] = None) -> DashboardData:
        skip_lists = role == WAREHOUSE_BROKER

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {}
            if not skip_lists:
                for name, path in self.SOURCES.items():
                    futures[name] = pool.submit(self._get_list, path)
            profile_future = pool.submit(self._get_profile)

            data = DashboardData(profile=profile_future.result())
            for name, future in futures.items():
                setattr(data, name, future.result())

        return data
