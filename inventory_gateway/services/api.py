"""
Query API
=========

Client-facing endpoints over the DataGateway, with tag-based caching.

Every endpoint is registered with the cache tags it provides (queries) or
invalidates (mutations). Successful query results are cached per
(endpoint, argument); a successful mutation drops every cached result
sharing one of its tags so the next read goes back to the backend.

Backend failures never raise out of an endpoint: it returns a QueryResult
holding either `data` or an `error` envelope `{"status": ..., "message": ...}`.

Usage:
    api = GatewayApi()

    result = await api.get_products("lap")
    if result.is_error:
        print(result.error["message"])
    else:
        for product in result.data:
            print(product.name)
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Hashable, Optional, Tuple

from inventory_gateway.core.constants import CacheTag
from inventory_gateway.core.exceptions import BackendOperationFailed
from inventory_gateway.core.logging import get_logger
from inventory_gateway.schemas.views import NewProduct
from inventory_gateway.services.gateway import DataGateway

logger = get_logger(__name__)


class EndpointKind(str, Enum):
    """Whether an endpoint reads (cached) or writes (invalidates)."""

    QUERY = "query"
    MUTATION = "mutation"


@dataclass(frozen=True)
class Endpoint:
    """
    Endpoint definition.

    Attributes:
        name: Public endpoint name (e.g. "getProducts")
        handler: DataGateway coroutine method it calls
        kind: Query (cached) or mutation (invalidates)
        provides_tags: Tags attached to cached results of a query
        invalidates_tags: Tags a successful mutation makes stale
    """

    name: str
    handler: str
    kind: EndpointKind
    provides_tags: Tuple[CacheTag, ...] = ()
    invalidates_tags: Tuple[CacheTag, ...] = ()


ENDPOINTS: Dict[str, Endpoint] = {
    endpoint.name: endpoint
    for endpoint in (
        Endpoint(
            name="getDashboardMetrics",
            handler="fetch_dashboard_metrics",
            kind=EndpointKind.QUERY,
            provides_tags=(CacheTag.DASHBOARD_METRICS,),
        ),
        Endpoint(
            name="getProducts",
            handler="fetch_products",
            kind=EndpointKind.QUERY,
            provides_tags=(CacheTag.PRODUCTS,),
        ),
        Endpoint(
            name="createProduct",
            handler="create_product",
            kind=EndpointKind.MUTATION,
            invalidates_tags=(CacheTag.PRODUCTS, CacheTag.DASHBOARD_METRICS),
        ),
        Endpoint(
            name="getUsers",
            handler="fetch_users",
            kind=EndpointKind.QUERY,
            provides_tags=(CacheTag.USERS,),
        ),
        Endpoint(
            name="getExpensesByCategory",
            handler="fetch_expenses_by_category",
            kind=EndpointKind.QUERY,
            provides_tags=(CacheTag.EXPENSES,),
        ),
    )
}


@dataclass(frozen=True)
class QueryResult:
    """Outcome of an endpoint call: `data` on success, `error` envelope on failure."""

    data: Any = None
    error: Optional[Dict[str, Any]] = None
    from_cache: bool = False

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass
class _CacheEntry:
    data: Any
    tags: frozenset = field(default_factory=frozenset)


class GatewayApi:
    """
    Cached, tag-invalidated endpoints.

    The cache lives on the instance; the gateway below it stays stateless.
    A read that was in flight while a mutation invalidated its tags is
    returned to its caller but not stored. Every caller gets its own copy
    of cached data, so changing a result never changes the cache.
    """

    def __init__(self, gateway: Optional[DataGateway] = None):
        self.gateway = gateway or DataGateway()
        self._cache: Dict[Tuple[str, Hashable], _CacheEntry] = {}
        self._generation = 0

    # ========================================
    # Endpoints
    # ========================================

    async def get_dashboard_metrics(self) -> QueryResult:
        return await self.query("getDashboardMetrics")

    async def get_products(self, search: Optional[str] = None) -> QueryResult:
        # "" and None both mean "all products"
        return await self.query("getProducts", search or None)

    async def create_product(self, new_product: NewProduct) -> QueryResult:
        return await self.mutate("createProduct", new_product)

    async def get_users(self) -> QueryResult:
        return await self.query("getUsers")

    async def get_expenses_by_category(self) -> QueryResult:
        return await self.query("getExpensesByCategory")

    # ========================================
    # Dispatch
    # ========================================

    async def query(self, name: str, arg: Hashable = None) -> QueryResult:
        """
        Run a query endpoint, serving from cache when possible.

        Args:
            name: Endpoint name
            arg: Endpoint argument (part of the cache key)
        """
        endpoint = self._endpoint(name, EndpointKind.QUERY)
        key = (name, arg)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s(%r)", name, arg)
            return QueryResult(data=copy.deepcopy(cached.data), from_cache=True)

        generation = self._generation
        result = await self._call(endpoint, arg)
        if not result.is_error and generation == self._generation:
            self._cache[key] = _CacheEntry(
                data=copy.deepcopy(result.data),
                tags=frozenset(endpoint.provides_tags)
            )
        return result

    async def mutate(self, name: str, arg: Any = None) -> QueryResult:
        """Run a mutation endpoint; invalidate its tags when it succeeds."""
        endpoint = self._endpoint(name, EndpointKind.MUTATION)
        result = await self._call(endpoint, arg)
        if not result.is_error:
            self.invalidate_tags(*endpoint.invalidates_tags)
        return result

    # ========================================
    # Cache Control
    # ========================================

    def invalidate_tags(self, *tags: CacheTag) -> int:
        """
        Drop every cached result carrying one of `tags`.

        Returns:
            Number of cache entries removed
        """
        wanted = {CacheTag(tag) for tag in tags}
        stale = [key for key, entry in self._cache.items() if entry.tags & wanted]
        for key in stale:
            del self._cache[key]
        self._generation += 1
        logger.debug(
            "Invalidated %s: %d cached result(s) dropped",
            ", ".join(sorted(tag.value for tag in wanted)), len(stale)
        )
        return len(stale)

    def reset(self) -> None:
        """Drop the whole cache."""
        self._cache.clear()
        self._generation += 1

    def is_cached(self, name: str, arg: Hashable = None) -> bool:
        return (name, arg) in self._cache

    # ========================================
    # Helpers
    # ========================================

    def _endpoint(self, name: str, kind: EndpointKind) -> Endpoint:
        endpoint = ENDPOINTS.get(name)
        if endpoint is None:
            raise KeyError(f"Unknown endpoint: {name}")
        if endpoint.kind != kind:
            raise ValueError(f"{name} is a {endpoint.kind.value}, not a {kind.value}")
        return endpoint

    async def _call(self, endpoint: Endpoint, arg: Any) -> QueryResult:
        handler = getattr(self.gateway, endpoint.handler)
        try:
            data = await (handler() if arg is None else handler(arg))
        except BackendOperationFailed as exc:
            return QueryResult(error=exc.to_envelope())
        return QueryResult(data=data)
