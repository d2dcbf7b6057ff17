"""
Services Package
================

- DataGateway: the five stateless handlers over the backend
- GatewayApi: cached, tag-invalidated endpoints on top of the gateway
"""

from inventory_gateway.services.gateway import DataGateway, get_data_gateway
from inventory_gateway.services.api import ENDPOINTS, Endpoint, GatewayApi, QueryResult

__all__ = [
    "DataGateway",
    "get_data_gateway",
    "GatewayApi",
    "Endpoint",
    "ENDPOINTS",
    "QueryResult",
]
